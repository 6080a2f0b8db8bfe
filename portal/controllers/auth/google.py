from flask import current_app
from flask_restful import Resource, Api
from portal.extension import db
from portal.models import User, UserProfile
from portal.service.identity_provider import email_is_verified
from portal.utils.errors import IdentityProviderError
from portal.utils.helper import parse_json
from .tokens import issue_session
from . import auth_bp

api = Api(auth_bp)


def find_or_create_google_user(claims):
    """
    Account for a validated Google identity.
    An existing account is only linked by email when Google has verified that email.
    """
    user = User.query.filter_by(auth_provider="google", provider_subject=claims["sub"]).first()
    if user is None:
        if not email_is_verified(claims):
            raise IdentityProviderError("Google account email is not verified")
        user = User.query.filter_by(email=claims["email"]).first()
    if user is None:
        user = User(email=claims["email"], auth_provider="google")
        db.session.add(user)
    user.provider_subject = claims["sub"]
    db.session.flush()

    profile = db.session.get(UserProfile, user.id)
    if profile is None:
        profile = UserProfile(id=user.id, email=user.email)
        db.session.add(profile)
    # profile name from the debtor record wins once verified
    if claims.get("name") and not profile.full_name:
        profile.full_name = claims["name"]
    if claims.get("picture"):
        profile.avatar_url = claims["picture"]
    return user


class GoogleSignIn(Resource):
    def post(self):
        data, error, status = parse_json(required_fields=["id_token"])
        if error:
            return error, status

        identity_provider = current_app.extensions["identity_provider"]
        try:
            claims = identity_provider.verify_id_token(data["id_token"])
            user = find_or_create_google_user(claims)
        except IdentityProviderError as e:
            db.session.rollback()
            return e.to_response()

        db.session.commit()
        return issue_session(user)


api.add_resource(GoogleSignIn, '/auth/google')
