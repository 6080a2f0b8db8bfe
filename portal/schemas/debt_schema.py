from portal.extension import ma
from portal.models import Debt
from marshmallow import fields

MONEY_FIELDS = (
    "loan_amount",
    "balance",
    "amount_due",
    "payment_amount",
    "payoff_amount",
    "late_fees",
    "high_credit",
    "last_payment_amount",
    "amount_promised",
)


class DebtSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Debt
        load_instance = True
        include_fk = True

    # Money as plain numbers for the browser
    loan_amount = fields.Float()
    balance = fields.Float()
    amount_due = fields.Float()
    payment_amount = fields.Float()
    payoff_amount = fields.Float()
    late_fees = fields.Float()
    apr = fields.Float()
    high_credit = fields.Float()
    last_payment_amount = fields.Float()
    amount_promised = fields.Float()

    # Date formatting
    date_promise_to_pay = ma.Date(format="%Y-%m-%d")
    date_loan_made = ma.Date(format="%Y-%m-%d")
    date_first_payment = ma.Date(format="%Y-%m-%d")
    date_contract_due = ma.Date(format="%Y-%m-%d")
    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")

    label = fields.String(dump_only=True)
