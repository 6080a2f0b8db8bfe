import logging
from flask import jsonify, make_response
from flask_restful import Resource, Api
from flask_jwt_extended import jwt_required, get_jwt, get_jwt_identity, unset_jwt_cookies
from portal.extension import db
from portal.models import TokenBlocklist
from . import auth_bp

api = Api(auth_bp)
logger = logging.getLogger(__name__)


class SignOut(Resource):
    @jwt_required()
    def post(self):
        db.session.add(TokenBlocklist(jti=get_jwt()["jti"]))
        db.session.commit()
        logger.info(f"User {get_jwt_identity()} signed out")

        response = make_response(jsonify({"message": "Signed out", "redirect": "/"}), 200)
        unset_jwt_cookies(response)
        return response

api.add_resource(SignOut, '/auth/sign-out')
