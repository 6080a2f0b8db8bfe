from flask import g
from flask_restful import Resource, Api
from portal.schemas.payment_schema import PaymentHistorySchema
from portal.utils.dashboard_service import DashboardService
from portal.utils.decorators import verified_required
from . import dashboard_bp

api = Api(dashboard_bp)
history_schema = PaymentHistorySchema(many=True)


class PaymentHistory(Resource):
    @verified_required
    def get(self):
        debts = DashboardService.get_debts(g.verification.debtor_id)
        history = DashboardService.get_payment_history(debts)
        return {"payments": history_schema.dump(history)}, 200


api.add_resource(PaymentHistory, "/dashboard/payments")
