from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from portal.extension import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    # federated users have no local password
    password_hash = db.Column(db.String(255), nullable=True)
    auth_provider = db.Column(db.String(30), nullable=False, default="password")  # password, google
    provider_subject = db.Column(db.String(255), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_sign_in_at = db.Column(db.DateTime, nullable=True)

    # identity verification throttling
    failed_verification_attempts = db.Column(db.Integer, nullable=False, default=0)
    last_failed_verification_at = db.Column(db.DateTime, nullable=True)

    # Relationships
    profile = db.relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    verification = db.relationship("Verification", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_verified(self):
        return bool(self.verification and self.verification.verified)


class TokenBlocklist(db.Model):
    __tablename__ = "token_blocklist"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
