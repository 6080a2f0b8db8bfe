from flask import request
from flask_restful import Api, Resource
from marshmallow import ValidationError
from portal.models import User
from portal.extension import db
from portal.schemas.user_schema import CredentialsSchema
from .tokens import issue_session
from . import auth_bp


api = Api(auth_bp)
credentials_schema = CredentialsSchema()


class SignUp(Resource):
    def post(self):
        try:
            data = credentials_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        if User.query.filter_by(email=data['email']).first():
            return {"message": "User with this email already exists"}, 400

        user = User(
            email=data['email'],
            auth_provider='password',
        )
        user.set_password(data['password'])

        db.session.add(user)
        db.session.commit()

        return issue_session(user, status=201, message="Account created. Please verify your identity.")

api.add_resource(SignUp, '/auth/sign-up')
