# tests/unit/services/test_auth_service.py
"""AuthService orchestration over identity and token services."""

from __future__ import annotations

import pytest

from ecommerce.services import AuthService
from ecommerce.services._shared.dto import AuthenticatedIdentity
from ecommerce.services._shared.errors import (
    InvalidCredentialsError,
    NotFoundError,
    SessionMismatchError,
)
from ecommerce.services.auth.dto import LoginIn, LogoutIn, RefreshIn
from tests.factories.user import DEFAULT_PASSWORD, AdminFactory, UserFactory


@pytest.fixture()
def auth(token_service) -> AuthService:
    return AuthService(tokens=token_service)


def test_login_issues_tokens_for_user_authorities(auth, token_service, redis_client):
    user = AdminFactory()

    pair = auth.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

    identity = token_service.authenticate(pair.access_token)
    assert identity.subject == user.public_id
    assert identity.authorities == frozenset({"ROLE_ADMIN"})
    assert redis_client.get(f"RT:{user.public_id}") == pair.refresh_token


def test_login_rejects_wrong_password_without_touching_store(auth, redis_client):
    user = UserFactory()

    with pytest.raises(InvalidCredentialsError):
        auth.login(LoginIn(email=user.email, password="nope-nope"))

    assert redis_client.keys("*") == []


def test_refresh_returns_new_access_token(auth, token_service):
    user = UserFactory()
    pair = auth.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

    access = auth.refresh(RefreshIn(refresh_token=pair.refresh_token))

    assert token_service.authenticate(access).subject == user.public_id


def test_logout_revokes_session(auth, token_service):
    user = UserFactory()
    pair = auth.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

    auth.logout(LogoutIn(access_token=pair.access_token))

    assert token_service.is_valid(pair.access_token) is False
    with pytest.raises(SessionMismatchError):
        auth.refresh(RefreshIn(refresh_token=pair.refresh_token))


def test_me_returns_profile(auth):
    user = UserFactory(name="Dana")

    out = auth.me(AuthenticatedIdentity(subject=user.public_id, authorities=frozenset()))

    assert out.public_id == user.public_id
    assert out.name == "Dana"


def test_me_for_deleted_subject(auth):
    with pytest.raises(NotFoundError):
        auth.me(AuthenticatedIdentity(subject="gone", authorities=frozenset({"ROLE_USER"})))


def test_deactivate_ends_refresh_session(auth, redis_client):
    user = UserFactory()
    pair = auth.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

    auth.deactivate(user.public_id)

    assert redis_client.exists(f"RT:{user.public_id}") == 0
    with pytest.raises(SessionMismatchError):
        auth.refresh(RefreshIn(refresh_token=pair.refresh_token))
    with pytest.raises(InvalidCredentialsError):
        auth.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))


def test_deactivate_unknown_user_keeps_sessions(auth, redis_client):
    redis_client.set("RT:someone", "token")

    with pytest.raises(NotFoundError):
        auth.deactivate("someone")

    assert redis_client.get("RT:someone") == "token"
