from datetime import datetime
from decimal import Decimal
from portal.extension import db

CENTS = Decimal("0.01")


def to_money(value):
    """Coerce a number or numeric string to a Decimal rounded to cents."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS)


class Debt(db.Model):
    __tablename__ = "debt"

    id = db.Column(db.Integer, primary_key=True)
    debtor_id = db.Column(db.Integer, db.ForeignKey("debtors.id", ondelete="CASCADE"), nullable=False, index=True)
    loan_number = db.Column(db.String(50), nullable=False)
    account_number = db.Column(db.String(50))
    loan_type = db.Column(db.String(50))
    loan_amount = db.Column(db.Numeric(12, 2), default=0)
    loan_frequency = db.Column(db.String(30))
    loan_schedule = db.Column(db.String(50))
    balance = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    amount_due = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    payment_amount = db.Column(db.Numeric(12, 2), default=0)
    payoff_amount = db.Column(db.Numeric(12, 2), default=0)
    late_fees = db.Column(db.Numeric(12, 2), default=0)
    apr = db.Column(db.Numeric(6, 3), default=0)
    high_credit = db.Column(db.Numeric(12, 2), default=0)
    last_payment_amount = db.Column(db.Numeric(12, 2), default=0)
    amount_promised = db.Column(db.Numeric(12, 2), default=0)
    date_promise_to_pay = db.Column(db.Date)
    date_loan_made = db.Column(db.Date)
    date_first_payment = db.Column(db.Date)
    date_contract_due = db.Column(db.Date)
    writeoff = db.Column(db.String(50))
    bankrupt = db.Column(db.Boolean, default=False)
    judgement_filed = db.Column(db.Boolean, default=False)
    security = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    debtor = db.relationship("Debtor", back_populates="debts")
    payments = db.relationship("Payment", back_populates="debt", cascade="all, delete-orphan")

    @property
    def label(self):
        return f"Loan #{self.loan_number}"

    def apply_payment(self, amount):
        """Decrement the balance by a captured payment amount."""
        amount = to_money(amount)
        self.balance = to_money(self.balance) - amount
        self.last_payment_amount = amount
        return self.balance
