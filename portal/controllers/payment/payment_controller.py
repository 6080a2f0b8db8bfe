from urllib.parse import urlencode
from flask import request, g, current_app
from flask_restful import Resource, Api
from marshmallow import ValidationError
from portal.schemas.debt_schema import DebtSchema
from portal.schemas.payment_schema import PaymentSchema, PaymentRequestSchema, CaptureRequestSchema
from portal.service.payment_service import (
    build_order,
    default_selection,
    get_debtor_debt,
    record_payment,
)
from portal.utils.dashboard_service import DashboardService
from portal.utils.decorators import verified_required
from portal.utils.errors import PortalError
from . import payment_bp

api = Api(payment_bp)

# Schemas
payment_schema = PaymentSchema()
debts_schema = DebtSchema(many=True)
payment_request_schema = PaymentRequestSchema()
capture_request_schema = CaptureRequestSchema()


class PaymentAccounts(Resource):

    @verified_required
    def get(self):
        debts = DashboardService.get_debts(g.verification.debtor_id)
        if not debts:
            return {"message": "No debt accounts found"}, 404

        return {
            "debts": debts_schema.dump(debts),
            "selected": default_selection(debts),
            "currency": current_app.config["PAYMENT_CURRENCY"],
            "client_id": current_app.config["PAYPAL_CLIENT_ID"],
        }, 200


class PaymentOrder(Resource):
    """Builds what the payment button's createOrder callback submits."""

    @verified_required
    def post(self):
        try:
            data = payment_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        try:
            debt = get_debtor_debt(g.verification.debtor_id, data["debt_id"])
            order = build_order(debt, data["amount"], currency=current_app.config["PAYMENT_CURRENCY"])
        except PortalError as e:
            return e.to_response()

        return {"order": order}, 200


class PaymentCapture(Resource):
    """Called from the payment button's onApprove callback once funds are captured."""

    @verified_required
    def post(self):
        try:
            data = capture_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        capture = data["capture"]
        try:
            payment, created = record_payment(
                g.verification.debtor_id,
                data["debt_id"],
                data["amount"],
                capture,
                processor=current_app.extensions["payment_processor"],
            )
        except PortalError as e:
            return e.to_response()

        return {
            "payment": payment_schema.dump(payment),
            "created": created,
            "redirect": "/confirmation?" + urlencode({
                "amount": f"{float(payment.amount):.2f}",
                "transaction": payment.transaction_id,
            }),
        }, 201 if created else 200


api.add_resource(PaymentAccounts, "/payment")
api.add_resource(PaymentOrder, "/payment/order")
api.add_resource(PaymentCapture, "/payment/capture")
