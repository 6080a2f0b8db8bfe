"""Payment accounts, order creation, capture recording and receipts"""

from decimal import Decimal
from urllib.parse import parse_qs

import pytest
from sqlalchemy.exc import OperationalError

from portal.extension import db
from portal.models import Debt, Payment

from conftest import make_auth_headers


@pytest.fixture
def headers(verified_user):
    return make_auth_headers(verified_user)


def capture_payload(debt, amount, transaction_id="PAYPAL-ORDER-1"):
    return {
        "debt_id": debt.id,
        "amount": amount,
        "capture": {"id": transaction_id, "status": "COMPLETED", "payer": {"email_address": "jane@example.com"}},
    }


def test_accounts_default_to_first_debt_amount_due(client, headers, debts):
    response = client.get("/payment", headers=headers)
    assert response.status_code == 200
    body = response.get_json()
    assert len(body["debts"]) == 2
    assert body["selected"] == {"debt_id": debts[0].id, "amount": "40.00"}
    assert body["currency"] == "USD"


def test_accounts_without_debts(client, headers):
    response = client.get("/payment", headers=headers)
    assert response.status_code == 404
    assert response.get_json()["message"] == "No debt accounts found"


def test_order_payload_references_loan_number(client, headers, debts):
    response = client.post("/payment/order", json={"debt_id": debts[0].id, "amount": "40.00"}, headers=headers)
    assert response.status_code == 200
    unit = response.get_json()["order"]["purchase_units"][0]
    assert unit["amount"] == {"value": "40.00", "currency_code": "USD"}
    assert unit["description"] == "Payment for Loan #L1"


def test_order_cannot_exceed_balance(client, headers, debts):
    response = client.post("/payment/order", json={"debt_id": debts[0].id, "amount": "100.01"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.parametrize("amount", ["0", "-5", "12.345", "abc", ""])
def test_order_rejects_invalid_amounts(client, headers, debts, amount):
    response = client.post("/payment/order", json={"debt_id": debts[0].id, "amount": amount}, headers=headers)
    assert response.status_code == 400


def test_order_for_another_debtors_debt(client, headers, other_debtor):
    foreign = Debt(debtor_id=other_debtor.id, loan_number="L2", balance=Decimal("50.00"), amount_due=Decimal("5.00"))
    db.session.add(foreign)
    db.session.commit()

    response = client.post("/payment/order", json={"debt_id": foreign.id, "amount": "5.00"}, headers=headers)
    assert response.status_code == 404


def test_capture_records_payment_and_decrements_balance(client, headers, debts, processor):
    debt = debts[0]
    response = client.post("/payment/capture", json=capture_payload(debt, "40.00"), headers=headers)
    assert response.status_code == 201
    body = response.get_json()
    assert body["created"] is True
    assert body["redirect"] == "/confirmation?amount=40.00&transaction=PAYPAL-ORDER-1"

    payment = Payment.query.filter_by(transaction_id="PAYPAL-ORDER-1").one()
    assert payment.amount == Decimal("40.00")
    assert payment.status == "completed"
    assert payment.payment_method == "PayPal"
    assert payment.payment_date is not None

    refreshed = db.session.get(Debt, debt.id)
    assert refreshed.balance == Decimal("60.00")
    assert refreshed.last_payment_amount == Decimal("40.00")
    assert processor.confirmed == [("PAYPAL-ORDER-1", Decimal("40.00"))]


def test_duplicate_capture_is_recorded_once(client, headers, debts):
    debt = debts[0]
    first = client.post("/payment/capture", json=capture_payload(debt, "40.00"), headers=headers)
    second = client.post("/payment/capture", json=capture_payload(debt, "40.00"), headers=headers)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.get_json()["created"] is False
    assert Payment.query.count() == 1
    assert db.session.get(Debt, debt.id).balance == Decimal("60.00")


def test_capture_requires_transaction_id(client, headers, debts):
    payload = capture_payload(debts[0], "40.00")
    payload["capture"] = {"status": "COMPLETED"}
    response = client.post("/payment/capture", json=payload, headers=headers)
    assert response.status_code == 400
    assert "capture" in response.get_json()["errors"]
    assert Payment.query.count() == 0


def test_processor_rejection_leaves_no_trace(client, headers, debts, rejecting_processor):
    response = client.post("/payment/capture", json=capture_payload(debts[0], "40.00"), headers=headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "Payment status is VOIDED"
    assert Payment.query.count() == 0
    assert db.session.get(Debt, debts[0].id).balance == Decimal("100.00")


def test_failed_balance_update_rolls_back_payment(client, headers, debts, monkeypatch):
    def broken_apply(self, amount):
        raise OperationalError("UPDATE debt", {}, Exception("database is down"))

    monkeypatch.setattr(Debt, "apply_payment", broken_apply)
    response = client.post("/payment/capture", json=capture_payload(debts[0], "40.00"), headers=headers)
    assert response.status_code == 500
    assert response.get_json()["message"] == "Failed to process payment"
    assert Payment.query.count() == 0
    assert db.session.get(Debt, debts[0].id).balance == Decimal("100.00")


def test_capture_against_foreign_debt(client, headers, other_debtor):
    foreign = Debt(debtor_id=other_debtor.id, loan_number="L2", balance=Decimal("50.00"), amount_due=Decimal("5.00"))
    db.session.add(foreign)
    db.session.commit()

    response = client.post("/payment/capture", json=capture_payload(foreign, "5.00"), headers=headers)
    assert response.status_code == 404
    assert Payment.query.count() == 0


def test_receipt_pdf(client, headers, debts, make_payment):
    payment = make_payment(debts[0], "40.00", 1, "TX-RECEIPT")
    response = client.get(f"/payment/{payment.id}/receipt", headers=headers)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/pdf"
    assert response.data.startswith(b"%PDF")


def test_receipt_for_foreign_payment(client, headers, other_debtor, make_payment):
    foreign = Debt(debtor_id=other_debtor.id, loan_number="L2", balance=Decimal("50.00"), amount_due=Decimal("5.00"))
    db.session.add(foreign)
    db.session.commit()
    payment = make_payment(foreign, "5.00", 1, "TX-FOREIGN")

    response = client.get(f"/payment/{payment.id}/receipt", headers=headers)
    assert response.status_code == 404


def test_capture_replay_of_another_debtors_transaction(client, headers, debts, other_debtor, make_payment):
    foreign = Debt(debtor_id=other_debtor.id, loan_number="L2", balance=Decimal("50.00"), amount_due=Decimal("5.00"))
    db.session.add(foreign)
    db.session.commit()
    make_payment(foreign, "5.00", 1, "TX-FOREIGN")

    response = client.post("/payment/capture", json=capture_payload(debts[0], "5.00", "TX-FOREIGN"), headers=headers)
    assert response.status_code == 404
    assert "payment" not in response.get_json()
    assert Payment.query.count() == 1
    assert db.session.get(Debt, debts[0].id).balance == Decimal("100.00")


def test_capture_replay_on_a_different_own_debt(client, headers, debts):
    client.post("/payment/capture", json=capture_payload(debts[0], "40.00"), headers=headers)
    response = client.post("/payment/capture", json=capture_payload(debts[1], "40.00"), headers=headers)
    assert response.status_code == 404
    assert Payment.query.count() == 1
    assert db.session.get(Debt, debts[1].id).balance == Decimal("250.50")


def test_capture_redirect_encodes_transaction_id(client, headers, debts):
    response = client.post("/payment/capture", json=capture_payload(debts[0], "40.00", "A&amount=999#x"), headers=headers)
    assert response.status_code == 201

    redirect = response.get_json()["redirect"]
    path, query = redirect.split("?", 1)
    assert path == "/confirmation"
    assert parse_qs(query) == {"amount": ["40.00"], "transaction": ["A&amount=999#x"]}
