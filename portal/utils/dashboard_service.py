from decimal import Decimal
from portal.models import Debt, Debtor, Payment
from portal.models.debt import to_money
from portal.utils.errors import NotFoundError

RECENT_PAYMENTS_LIMIT = 5


class DashboardService:
    @staticmethod
    def get_debtor(verification):
        debtor = Debtor.query.get(verification.debtor_id) if verification.debtor_id else None
        if not debtor:
            raise NotFoundError("Debtor information not found")
        return debtor

    @staticmethod
    def get_debts(debtor_id):
        return Debt.query.filter_by(debtor_id=debtor_id).order_by(Debt.id).all()

    @staticmethod
    def get_totals(debts):
        total_balance = sum((to_money(d.balance) for d in debts), Decimal("0.00"))
        total_due = sum((to_money(d.amount_due) for d in debts), Decimal("0.00"))
        return {"total_balance": float(total_balance), "total_due": float(total_due)}

    @staticmethod
    def get_payments(debts, limit=None):
        if not debts:
            return []
        query = Payment.query.filter(
            Payment.debt_id.in_([d.id for d in debts])
        ).order_by(Payment.payment_date.desc(), Payment.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_payment_history(debts):
        """Payments newest first, each labelled with its loan number."""
        debts_by_id = {d.id: d for d in debts}
        history = []
        for payment in DashboardService.get_payments(debts):
            debt = debts_by_id.get(payment.debt_id)
            history.append({
                "payment": payment,
                "loan_label": debt.label if debt else "Unknown",
            })
        return history
