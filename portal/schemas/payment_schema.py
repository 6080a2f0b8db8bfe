from portal.extension import ma
from portal.models import Payment
from portal.service.payment_service import CaptureResult
from marshmallow import Schema, fields, validate, post_load, EXCLUDE


class PaymentSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Payment
        load_instance = True
        include_fk = True

    amount = fields.Float()
    payment_date = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")


class PaymentHistorySchema(Schema):
    payment = fields.Nested(PaymentSchema)
    loan_label = fields.String()


class CaptureSchema(Schema):
    """Validates the payment button's capture details at the boundary."""

    class Meta:
        unknown = EXCLUDE

    id = fields.String(required=True, validate=validate.Length(min=1, max=100))
    status = fields.String()

    @post_load(pass_original=True)
    def make_capture(self, data, original_data, **kwargs):
        return CaptureResult(transaction_id=data["id"], raw_payload=dict(original_data or {}))


class PaymentRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    debt_id = fields.Integer(required=True)
    # kept as text so the two-decimal rule can be checked on what was typed
    amount = fields.Raw(required=True)


class CaptureRequestSchema(PaymentRequestSchema):
    capture = fields.Nested(CaptureSchema, required=True)
