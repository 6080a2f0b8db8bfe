from flask_restful import Resource, Api
from portal.models import User
from portal.utils.helper import parse_json
from .tokens import issue_session
from . import auth_bp

api = Api(auth_bp)


class SignIn(Resource):
    def post(self):
        data, error, status = parse_json(required_fields=["email", "password"])
        if error:
            return {"message": "Email and password required"}, 400

        user = User.query.filter_by(email=data["email"]).first()
        if not user or not user.check_password(data["password"]):
            return {"message": "Invalid credentials"}, 401

        return issue_session(user)

api.add_resource(SignIn, '/auth/sign-in')
