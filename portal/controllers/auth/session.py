from flask import request
from flask_restful import Resource, Api
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError
from portal.extension import db
from portal.models import User, UserProfile
from portal.schemas.user_schema import UserSchema, UserProfileSchema, ProfileUpdateSchema
from . import auth_bp

api = Api(auth_bp)
user_schema = UserSchema()
profile_schema = UserProfileSchema()
profile_update_schema = ProfileUpdateSchema()


class SessionResource(Resource):
    @jwt_required()
    def get(self):
        user = User.query.get_or_404(int(get_jwt_identity()))
        profile = db.session.get(UserProfile, user.id)
        return {
            "user": user_schema.dump(user),
            "profile": profile_schema.dump(profile) if profile else None,
            "verified": user.is_verified,
        }, 200

    @jwt_required()
    def patch(self):
        """Update the metadata attached to the signed-in identity."""
        user = User.query.get_or_404(int(get_jwt_identity()))
        try:
            data = profile_update_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        profile = db.session.get(UserProfile, user.id)
        if profile is None:
            profile = UserProfile(id=user.id, email=user.email)
            db.session.add(profile)

        for field in ["full_name", "avatar_url"]:
            if field in data:
                setattr(profile, field, data[field])

        db.session.commit()
        return {"profile": profile_schema.dump(profile)}, 200

api.add_resource(SessionResource, '/auth/session')
