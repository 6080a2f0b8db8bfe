from portal.extension import ma
from portal.models import Debtor
from marshmallow import fields


class DebtorSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Debtor
        load_instance = True

    birthday = ma.Date(format="%Y-%m-%d")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    full_name = fields.String(dump_only=True)
