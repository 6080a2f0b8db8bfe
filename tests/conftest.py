"""Pytest fixtures for testing"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from portal import create_app
from portal.extension import db
from portal.models import Debt, Debtor, Payment, User, Verification
from portal.utils.errors import PaymentProcessorError


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SQLALCHEMY_ENGINE_OPTIONS": {},
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "RUN_MIGRATIONS": False,
    "SEED_ON_STARTUP": False,
    "VERIFY_MAX_ATTEMPTS": 5,
    "VERIFY_LOCKOUT_MINUTES": 15,
}


class FakeProcessor:
    """Stands in for the PayPal client; records what it was asked to confirm."""

    def __init__(self, error=None):
        self.error = error
        self.confirmed = []

    def confirm_capture(self, capture, amount):
        if self.error:
            raise self.error
        self.confirmed.append((capture.transaction_id, amount))
        return capture


class FakeIdentityProvider:
    def __init__(self, claims=None, error=None):
        self.claims = claims
        self.error = error

    def verify_id_token(self, id_token):
        if self.error:
            raise self.error
        return self.claims


@pytest.fixture
def app():
    """Create app on an in-memory database"""
    app = create_app(TEST_CONFIG)
    app.extensions["payment_processor"] = FakeProcessor()
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def processor(app):
    return app.extensions["payment_processor"]


@pytest.fixture
def rejecting_processor(app):
    fake = FakeProcessor(error=PaymentProcessorError("Payment status is VOIDED", status_code=400))
    app.extensions["payment_processor"] = fake
    return fake


@pytest.fixture
def debtor(app):
    debtor = Debtor(
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        phone="555-123-4567",
        birthday=date(1990, 1, 1),
        loan_number="L1",
        account_number="A1",
    )
    db.session.add(debtor)
    db.session.commit()
    return debtor


@pytest.fixture
def other_debtor(app):
    debtor = Debtor(
        first_name="John",
        last_name="Roe",
        email="john@example.com",
        phone="555-987-6543",
        birthday=date(1985, 6, 15),
        loan_number="L2",
    )
    db.session.add(debtor)
    db.session.commit()
    return debtor


@pytest.fixture
def debts(debtor):
    records = [
        Debt(
            debtor_id=debtor.id,
            loan_number="L1",
            loan_type="Installment",
            balance=Decimal("100.00"),
            amount_due=Decimal("40.00"),
        ),
        Debt(
            debtor_id=debtor.id,
            loan_number="L1-B",
            loan_type="Auto",
            balance=Decimal("250.50"),
            amount_due=Decimal("75.25"),
        ),
    ]
    db.session.add_all(records)
    db.session.commit()
    return records


@pytest.fixture
def user(app):
    user = User(email="jane@example.com", auth_provider="password")
    user.set_password("secret123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def verified_user(user, debtor):
    db.session.add(Verification(
        user_id=user.id,
        debtor_id=debtor.id,
        verified=True,
        verification_date=datetime.utcnow(),
        verification_method="identity_verification",
    ))
    db.session.commit()
    return user


def make_auth_headers(user):
    token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    return make_auth_headers(user)


@pytest.fixture
def make_payment():
    def _make(debt, amount, days_ago, transaction_id):
        payment = Payment(
            debt_id=debt.id,
            amount=Decimal(amount),
            payment_date=datetime.utcnow() - timedelta(days=days_ago),
            payment_method="PayPal",
            transaction_id=transaction_id,
            status="completed",
        )
        db.session.add(payment)
        db.session.commit()
        return payment
    return _make
