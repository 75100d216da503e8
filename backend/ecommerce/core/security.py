"""Bearer-token authentication gate and token service wiring.

The gate runs before every request. It never rejects a request on its own:
it only records who the caller is in ``flask.g.identity`` (``None`` for
anonymous callers). Endpoints that need a caller use ``require_auth`` /
``require_role`` from :mod:`ecommerce.api.deps`.
"""

from __future__ import annotations

import logging

from flask import Flask, Request, current_app, g, request

from ecommerce.core.extensions import get_redis
from ecommerce.infra.jwt import FlaskJWTTokenCodec
from ecommerce.infra.redis import RedisCredentialStore
from ecommerce.services._shared.dto import AuthenticatedIdentity
from ecommerce.services._shared.errors import CredentialStoreError, TokenError
from ecommerce.services.tokens import AuthTokenConfig, TokenService

log = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def extract_bearer_token(req: Request) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header.

    The prefix is matched literally and case-sensitively and the rest of the
    header is returned as is. Any other scheme, a missing header or an empty
    token yields ``None``.
    """
    header = req.headers.get(AUTHORIZATION_HEADER)
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    return token or None


def get_token_service() -> TokenService:
    """Build a :class:`TokenService` from the current app's config.

    :raises CredentialStoreError: When no Redis client is configured.
    """
    try:
        client = get_redis()
    except RuntimeError as exc:
        raise CredentialStoreError("Credential store is not configured") from exc

    cfg = current_app.config
    return TokenService(
        codec=FlaskJWTTokenCodec(),
        store=RedisCredentialStore(
            client,
            refresh_prefix=cfg["AUTH_REFRESH_KEY_PREFIX"],
            blacklist_prefix=cfg["AUTH_BLACKLIST_KEY_PREFIX"],
        ),
        cfg=AuthTokenConfig(
            access_expires=cfg["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=cfg["JWT_REFRESH_TOKEN_EXPIRES"],
        ),
    )


def current_identity() -> AuthenticatedIdentity | None:
    """Identity established by the gate for this request, if any."""
    return getattr(g, "identity", None)


def authenticate_request() -> None:
    """Populate ``g.identity`` from the bearer token. Never raises."""
    g.identity = None
    token = extract_bearer_token(request)
    if token is None:
        log.debug("No bearer token on %s", request.path, extra={"path": request.path})
        return

    try:
        tokens = get_token_service()
        if tokens.is_valid(token):
            g.identity = tokens.authenticate(token)
    except TokenError as exc:
        log.warning("Rejected bearer token: %s", exc, extra={"path": request.path})
        g.identity = None
    except Exception:
        log.exception("Could not set user authentication", extra={"path": request.path})
        g.identity = None


def init_app(app: Flask) -> None:
    """Register the gate as a ``before_request`` hook."""
    app.before_request(authenticate_request)


__all__ = [
    "authenticate_request",
    "current_identity",
    "extract_bearer_token",
    "get_token_service",
    "init_app",
]
