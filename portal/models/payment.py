from datetime import datetime
from portal.extension import db


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    debt_id = db.Column(db.Integer, db.ForeignKey("debt.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    payment_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    payment_method = db.Column(db.String(50))  # PayPal
    # processor-assigned id, one payment per capture
    transaction_id = db.Column(db.String(100), unique=True, nullable=True)
    status = db.Column(db.String(30), nullable=False, default="completed")
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    debt = db.relationship("Debt", back_populates="payments")
