from portal.extension import ma
from portal.models import Verification
from marshmallow import Schema, fields, pre_load, validates_schema, ValidationError, EXCLUDE


class VerificationSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Verification
        load_instance = True
        include_fk = True

    verification_date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    updated_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class VerifyIdentitySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    loan_number = fields.String(load_default=None)
    phone = fields.String(load_default=None)
    birthday = fields.Date(required=True)
    email = fields.Email(load_default=None)

    @pre_load
    def drop_blank_fields(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        # form inputs arrive as empty strings when left blank
        return {k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())}

    @validates_schema
    def require_natural_key(self, data, **kwargs):
        if not (data.get("loan_number") or "").strip() and not (data.get("phone") or "").strip():
            raise ValidationError("Provide a loan number or a phone number", "loan_number")
