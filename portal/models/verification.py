from datetime import datetime
from portal.extension import db


class Verification(db.Model):
    __tablename__ = "verification"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    debtor_id = db.Column(db.Integer, db.ForeignKey("debtors.id"), nullable=True)
    verified = db.Column(db.Boolean, nullable=False, default=False)
    verification_date = db.Column(db.DateTime)
    verification_method = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = db.relationship("User", back_populates="verification")
    debtor = db.relationship("Debtor", back_populates="verifications")
