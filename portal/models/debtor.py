from datetime import datetime
from portal.extension import db


class Debtor(db.Model):
    __tablename__ = "debtors"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(30), index=True)
    cell_phone = db.Column(db.String(30))
    birthday = db.Column(db.Date, nullable=False)
    address = db.Column(db.String(255))
    city = db.Column(db.String(100))
    state = db.Column(db.String(50))
    zip = db.Column(db.String(10))
    loan_number = db.Column(db.String(50), index=True)
    account_number = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    debts = db.relationship("Debt", back_populates="debtor", cascade="all, delete-orphan")
    verifications = db.relationship("Verification", back_populates="debtor")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"
