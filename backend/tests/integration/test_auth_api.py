# tests/integration/test_auth_api.py
"""End-to-end HTTP flows for sign-up, login, refresh, logout and ``/me``."""

from __future__ import annotations

import pytest

from ecommerce.core.extensions import REDIS_EXTENSION_KEY
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.http import bearer, problem

BASE = "/api/v1/auth"


def _login(client, email, password=DEFAULT_PASSWORD):
    return client.post(f"{BASE}/login", json={"email": email, "password": password})


# ------------------------------- sign-up ----------------------------------- #
def test_signup_creates_user(client):
    resp = client.post(
        f"{BASE}/signup",
        json={"email": "New@Example.com", "password": "secret123", "name": "Newbie"},
    )

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["email"] == "new@example.com"
    assert data["role"] == "USER"
    assert "password" not in data and "password_hash" not in data


def test_signup_duplicate_email_conflicts(client):
    UserFactory(email="dup@example.com")

    resp = client.post(
        f"{BASE}/signup",
        json={"email": "dup@example.com", "password": "secret123", "name": "Dup"},
    )

    assert resp.status_code == 409
    assert problem(resp)["code"] == "duplicate_email"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "secret123", "name": "Bob"},
        {"email": "bob@example.com", "password": "short", "name": "Bob"},
        {"email": "bob@example.com", "password": "x" * 17, "name": "Bob"},
        {"email": "bob@example.com", "password": "secret123", "name": "B"},
        {"email": "bob@example.com", "password": "secret123", "name": "B" * 11},
        {"email": "bob@example.com", "password": "secret123"},
        {"email": "bob@example.com", "password": "secret123", "name": "   "},
        {"email": "bob@example.com", "password": "        ", "name": "Bob"},
        {"email": "bob@localhost", "password": "secret123", "name": "Bob"},
    ],
)
def test_signup_validation(client, payload):
    resp = client.post(f"{BASE}/signup", json=payload)

    assert resp.status_code == 422
    body = problem(resp)
    assert body["code"] == "validation_error"
    assert body["details"]["errors"]


# -------------------------------- login ------------------------------------ #
def test_login_returns_token_pair(client, redis_client):
    user = UserFactory()

    resp = _login(client, user.email)

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["grant_type"] == "Bearer"
    assert data["access_token"] and data["refresh_token"]
    assert isinstance(data["access_token_expires_in"], int)
    assert redis_client.get(f"RT:{user.public_id}") == data["refresh_token"]


def test_login_wrong_password(client):
    user = UserFactory()

    resp = _login(client, user.email, "wrong-password")

    assert resp.status_code == 401
    assert problem(resp)["code"] == "invalid_credentials"
    assert resp.headers["WWW-Authenticate"].startswith("Bearer")


def test_login_without_credential_store(client, app):
    user = UserFactory()
    app.extensions.pop(REDIS_EXTENSION_KEY)

    resp = _login(client, user.email)

    assert resp.status_code == 503
    assert problem(resp)["code"] == "credential_store_unavailable"


# --------------------------------- me -------------------------------------- #
def test_me_requires_authentication(client):
    resp = client.get(f"{BASE}/me")

    assert resp.status_code == 401
    assert problem(resp)["code"] == "authentication_required"


def test_me_returns_profile(client):
    user = UserFactory(name="Erin")
    tokens = _login(client, user.email).get_json()["data"]

    resp = client.get(f"{BASE}/me", headers=bearer(tokens["access_token"]))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["public_id"] == user.public_id
    assert resp.get_json()["data"]["name"] == "Erin"


# ------------------------------- refresh ----------------------------------- #
def test_refresh_issues_usable_access_token(client):
    user = UserFactory()
    tokens = _login(client, user.email).get_json()["data"]

    resp = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["grant_type"] == "Bearer"
    me = client.get(f"{BASE}/me", headers=bearer(data["access_token"]))
    assert me.status_code == 200


def test_refresh_with_superseded_token(client):
    user = UserFactory()
    first = _login(client, user.email).get_json()["data"]
    _login(client, user.email)

    resp = client.post(f"{BASE}/refresh", json={"refresh_token": first["refresh_token"]})

    assert resp.status_code == 401
    assert problem(resp)["code"] == "session_mismatch"


def test_refresh_with_garbage(client):
    resp = client.post(f"{BASE}/refresh", json={"refresh_token": "garbage"})

    assert resp.status_code == 401
    assert problem(resp)["code"] == "refresh_token_invalid"


def test_refresh_requires_body(client):
    resp = client.post(f"{BASE}/refresh", json={})

    assert resp.status_code == 422


# -------------------------------- logout ----------------------------------- #
def test_logout_revokes_access_and_refresh(client, redis_client):
    user = UserFactory()
    tokens = _login(client, user.email).get_json()["data"]
    headers = bearer(tokens["access_token"])

    resp = client.post(f"{BASE}/logout", headers=headers)

    assert resp.status_code == 204
    assert redis_client.get(f"BL:{tokens['access_token']}") == "logout"
    assert client.get(f"{BASE}/me", headers=headers).status_code == 401
    again = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert again.status_code == 401


def test_logout_requires_bearer(client):
    resp = client.post(f"{BASE}/logout")

    assert resp.status_code == 401
    assert problem(resp)["code"] == "authentication_required"


def test_logout_with_forged_token(client):
    resp = client.post(f"{BASE}/logout", headers=bearer("forged.token.value"))

    assert resp.status_code == 401
    assert problem(resp)["code"] == "token_invalid"
