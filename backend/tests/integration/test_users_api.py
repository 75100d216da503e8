# tests/integration/test_users_api.py
from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD, AdminFactory, UserFactory
from tests.helpers.http import bearer, problem


def _token(client, user) -> str:
    resp = client.post(
        "/api/v1/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD}
    )
    return resp.get_json()["data"]["access_token"]


def test_users_signup_alias(client):
    resp = client.post(
        "/api/v1/users/signup",
        json={"email": "alias@example.com", "password": "secret123", "name": "Alias"},
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["email"] == "alias@example.com"


def test_lookup_requires_authentication(client):
    user = UserFactory()

    resp = client.get(f"/api/v1/users/{user.public_id}")

    assert resp.status_code == 401
    assert problem(resp)["code"] == "authentication_required"


def test_lookup_by_public_id_and_email(client):
    caller = UserFactory()
    target = UserFactory(name="Target")
    headers = bearer(_token(client, caller))

    by_id = client.get(f"/api/v1/users/{target.public_id}", headers=headers)
    by_email = client.get(f"/api/v1/users/email/{target.email}", headers=headers)

    assert by_id.status_code == 200
    assert by_email.status_code == 200
    assert by_id.get_json() == by_email.get_json()
    assert by_id.get_json()["data"]["name"] == "Target"


def test_lookup_unknown_user(client):
    headers = bearer(_token(client, UserFactory()))

    resp = client.get("/api/v1/users/does-not-exist", headers=headers)

    assert resp.status_code == 404
    assert problem(resp)["code"] == "user_not_found"


def test_admin_deactivate_requires_admin_role(client):
    target = UserFactory()
    headers = bearer(_token(client, UserFactory()))

    resp = client.delete(f"/api/v1/admin/users/{target.public_id}", headers=headers)

    assert resp.status_code == 403
    assert problem(resp)["code"] == "forbidden"


def test_admin_deactivate_anonymous(client):
    resp = client.delete("/api/v1/admin/users/whoever")

    assert resp.status_code == 401


def test_admin_deactivates_user(client):
    target = UserFactory()
    headers = bearer(_token(client, AdminFactory()))

    resp = client.delete(f"/api/v1/admin/users/{target.public_id}", headers=headers)

    assert resp.status_code == 204
    assert client.get(f"/api/v1/users/{target.public_id}", headers=headers).status_code == 404
    login = client.post(
        "/api/v1/auth/login", json={"email": target.email, "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == 401


def test_deactivated_user_cannot_refresh(client):
    target = UserFactory()
    tokens = client.post(
        "/api/v1/auth/login", json={"email": target.email, "password": DEFAULT_PASSWORD}
    ).get_json()["data"]
    headers = bearer(_token(client, AdminFactory()))

    deleted = client.delete(f"/api/v1/admin/users/{target.public_id}", headers=headers)
    assert deleted.status_code == 204

    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401
    assert problem(resp)["code"] == "session_mismatch"
