"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from ecommerce.api.deps import authenticated_identity, json_response, require_auth, timing
from ecommerce.core.errors import Unauthorized
from ecommerce.core.extensions import limiter
from ecommerce.core.security import extract_bearer_token, get_token_service
from ecommerce.schemas import (
    AccessTokenSchema,
    LoginSchema,
    RefreshSchema,
    SignUpSchema,
    TokenPairSchema,
    UserSchema,
)
from ecommerce.services import AuthService, IdentityService, LoginIn, LogoutIn, RefreshIn, UserSignUpIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignUpSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
user_schema = UserSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _auth_service() -> AuthService:
    return AuthService(tokens=get_token_service())


def sign_up_from_request():
    """Validate a sign-up payload and create the account (shared with ``/users``)."""

    data = signup_schema.load(request.get_json(silent=True) or {})
    user = IdentityService().sign_up(UserSignUpIn(**data))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/signup")
@timing
def signup():
    """Create an account with the ``USER`` role."""

    return sign_up_from_request()


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = _auth_service().login(LoginIn(**data))
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the current refresh token for a new access token."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    access = _auth_service().refresh(RefreshIn(**data))
    return json_response({"data": access_token_schema.dump({"access_token": access})})


@bp.post("/logout")
@timing
def logout():
    """Revoke the bearer token and drop the refresh session."""

    token = extract_bearer_token(request)
    if token is None:
        raise Unauthorized("Bearer token required", code="authentication_required")
    _auth_service().logout(LogoutIn(access_token=token))
    return "", 204


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""

    user = _auth_service().me(authenticated_identity())
    return json_response({"data": user_schema.dump(user)})
