"""Route-level access control and the verification gatekeeper"""

import pytest
from sqlalchemy.exc import OperationalError

from portal.utils import decorators

from conftest import make_auth_headers


@pytest.mark.parametrize("path", [
    "/dashboard",
    "/dashboard/payments",
    "/payment",
    "/confirmation",
    "/verify",
])
def test_protected_paths_redirect_to_sign_in(client, path):
    response = client.get(path)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth/sign-in")


def test_protected_post_redirects_without_session(client, debts):
    response = client.post("/payment/capture", json={"debt_id": debts[0].id, "amount": "10.00"})
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth/sign-in")
    assert response.get_json() is None


def test_invalid_token_counts_as_no_session(client):
    response = client.get("/dashboard", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth/sign-in")


def test_auth_pages_bounce_signed_in_users(client, auth_headers):
    response = client.post("/auth/sign-in", json={}, headers=auth_headers)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")


def test_session_endpoint_passes_through_for_signed_in_users(client, auth_headers):
    response = client.get("/auth/session", headers=auth_headers)
    assert response.status_code == 200


def test_unprotected_root_passes_through(client):
    response = client.get("/")
    assert response.status_code == 200


@pytest.mark.parametrize("path", ["/dashboard", "/dashboard/payments", "/payment"])
def test_unverified_user_redirected_to_verification(client, user, auth_headers, path):
    response = client.get(path, headers=auth_headers)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/verify")


def test_unverified_flag_false_is_not_verified(client, user, debtor, auth_headers):
    from portal.extension import db
    from portal.models import Verification

    db.session.add(Verification(user_id=user.id, debtor_id=debtor.id, verified=False))
    db.session.commit()

    response = client.get("/dashboard", headers=auth_headers)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/verify")


def test_verified_user_sees_dashboard(client, verified_user, debts):
    response = client.get("/dashboard", headers=make_auth_headers(verified_user))
    assert response.status_code == 200


def test_verified_user_without_profile_still_renders(client, verified_user, debts):
    response = client.get("/dashboard", headers=make_auth_headers(verified_user))
    assert response.status_code == 200
    assert response.get_json()["profile"] is None


def test_failed_verification_lookup_sends_user_to_verify(client, verified_user, debts, monkeypatch):
    def broken_lookup(user_id):
        raise OperationalError("SELECT verification", {}, Exception("database is down"))

    monkeypatch.setattr(decorators, "find_verification", broken_lookup)
    response = client.get("/dashboard", headers=make_auth_headers(verified_user))
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/verify")
