from portal.extension import ma
from portal.models import User, UserProfile
from marshmallow import Schema, fields, validate, EXCLUDE


class UserSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = User
        load_instance = True
        exclude = (
            "password_hash",
            "provider_subject",
            "failed_verification_attempts",
            "last_failed_verification_at",
        )

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    last_sign_in_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    is_verified = fields.Boolean(dump_only=True)


class UserProfileSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = UserProfile
        load_instance = True
        include_fk = True

    last_sign_in = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=6))


class ProfileUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(validate=validate.Length(max=200))
    avatar_url = fields.Url(validate=validate.Length(max=500))
