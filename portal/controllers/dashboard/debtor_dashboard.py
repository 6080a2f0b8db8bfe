from flask import g
from flask_restful import Resource, Api
from portal.schemas.debt_schema import DebtSchema
from portal.schemas.debtor_schema import DebtorSchema
from portal.schemas.payment_schema import PaymentSchema
from portal.schemas.user_schema import UserProfileSchema
from portal.utils.dashboard_service import DashboardService, RECENT_PAYMENTS_LIMIT
from portal.utils.decorators import verified_required
from portal.utils.errors import PortalError
from . import dashboard_bp

api = Api(dashboard_bp)

debtor_schema = DebtorSchema()
debts_schema = DebtSchema(many=True)
payments_schema = PaymentSchema(many=True)
profile_schema = UserProfileSchema()


class DebtorDashboard(Resource):
    @verified_required
    def get(self):
        try:
            debtor = DashboardService.get_debtor(g.verification)
        except PortalError as e:
            return e.to_response()

        debts = DashboardService.get_debts(debtor.id)
        recent_payments = DashboardService.get_payments(debts, limit=RECENT_PAYMENTS_LIMIT)

        return {
            "debtor": debtor_schema.dump(debtor),
            "profile": profile_schema.dump(g.profile) if g.profile else None,
            "debts": debts_schema.dump(debts),
            **DashboardService.get_totals(debts),
            "recent_payments": payments_schema.dump(recent_payments),
        }, 200


api.add_resource(DebtorDashboard, "/dashboard")
