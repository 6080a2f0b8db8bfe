"""Dashboard totals, payment history and confirmation"""

from datetime import date

import pytest

from portal.controllers.confirmation.confirmation import confirmation_details
from portal.extension import db
from portal.models import Debt, UserProfile

from conftest import make_auth_headers


@pytest.fixture
def headers(verified_user):
    return make_auth_headers(verified_user)


def test_dashboard_totals_are_sums_over_debts(client, headers, debts):
    response = client.get("/dashboard", headers=headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body["total_balance"] == pytest.approx(350.50)
    assert body["total_due"] == pytest.approx(115.25)
    assert body["debtor"]["first_name"] == "Jane"
    assert body["debtor"]["full_name"] == "Jane Doe"
    assert {d["loan_number"] for d in body["debts"]} == {"L1", "L1-B"}


def test_dashboard_excludes_other_debtors(client, headers, debts, other_debtor):
    db.session.add(Debt(debtor_id=other_debtor.id, loan_number="L2", balance=1000, amount_due=100))
    db.session.commit()

    body = client.get("/dashboard", headers=headers).get_json()
    assert body["total_balance"] == pytest.approx(350.50)
    assert len(body["debts"]) == 2


def test_dashboard_with_no_debts(client, headers):
    body = client.get("/dashboard", headers=headers).get_json()
    assert body["debts"] == []
    assert body["total_balance"] == 0
    assert body["recent_payments"] == []


def test_dashboard_includes_profile_when_present(client, verified_user, headers, debts):
    db.session.add(UserProfile(id=verified_user.id, email=verified_user.email, full_name="Jane Doe"))
    db.session.commit()

    body = client.get("/dashboard", headers=headers).get_json()
    assert body["profile"]["full_name"] == "Jane Doe"


def test_dashboard_limits_recent_payments(client, headers, debts, make_payment):
    for i in range(7):
        make_payment(debts[0], "1.00", i, f"TX-{i}")

    body = client.get("/dashboard", headers=headers).get_json()
    assert [p["transaction_id"] for p in body["recent_payments"]] == ["TX-0", "TX-1", "TX-2", "TX-3", "TX-4"]


def test_payment_history_is_newest_first_with_labels(client, headers, debts, make_payment):
    make_payment(debts[0], "10.00", 20, "TX-OLD")
    make_payment(debts[1], "20.00", 1, "TX-NEW")
    make_payment(debts[0], "15.00", 5, "TX-MID")

    response = client.get("/dashboard/payments", headers=headers)
    assert response.status_code == 200
    history = response.get_json()["payments"]

    assert [h["payment"]["transaction_id"] for h in history] == ["TX-NEW", "TX-MID", "TX-OLD"]
    assert [h["loan_label"] for h in history] == ["Loan #L1-B", "Loan #L1", "Loan #L1"]

    dates = [h["payment"]["payment_date"] for h in history]
    assert dates == sorted(dates, reverse=True)


def test_payment_history_empty(client, headers):
    response = client.get("/dashboard/payments", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["payments"] == []


def test_confirmation_without_parameters_renders_na(client, auth_headers):
    response = client.get("/confirmation", headers=auth_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body["amount"] == "N/A"
    assert body["transaction_id"] == "N/A"


def test_confirmation_formats_amount(client, auth_headers):
    response = client.get("/confirmation?amount=40&transaction=PAYPAL-1", headers=auth_headers)
    body = response.get_json()
    assert body["amount"] == "$40.00"
    assert body["transaction_id"] == "PAYPAL-1"


def test_confirmation_passes_through_non_numeric_amount():
    details = confirmation_details("forty", None, today=date(2026, 1, 2))
    assert details == {"amount": "forty", "transaction_id": "N/A", "date": "2026-01-02"}


@pytest.mark.parametrize("amount", ["nan", "inf", "-Infinity"])
def test_confirmation_leaves_non_finite_amounts_unformatted(amount):
    details = confirmation_details(amount, "TX-1", today=date(2026, 1, 2))
    assert details["amount"] == amount


def test_confirmation_formats_thousands():
    assert confirmation_details("1234.5", "TX-1")["amount"] == "$1,234.50"
