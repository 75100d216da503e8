from __future__ import annotations

import logging
from dataclasses import dataclass

from ecommerce.core import errors as api_errors
from ecommerce.services._shared.errors import (
    ConflictError,
    CredentialStoreError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    NotFoundError,
    ServiceError,
    SessionMismatchError,
    TokenError,
)
from ecommerce.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (caller, tracing).

    :param actor_id: Public id of the authenticated caller.
    :param authorities: Authorities granted to the caller.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: str | None = None
    authorities: frozenset[str] = frozenset()
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation to API errors.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            code = "user_not_found" if exc.entity == "User" else "not_found"
            return api_errors.NotFound(str(exc), code=code)

        if isinstance(exc, ConflictError):
            code = "duplicate_email" if exc.entity == "User" else "conflict"
            return api_errors.Conflict(str(exc), code=code)

        if isinstance(exc, InvalidCredentialsError):
            return api_errors.Unauthorized(str(exc), code="invalid_credentials")

        if isinstance(exc, ExpiredTokenError):
            return api_errors.Unauthorized(str(exc), code="token_expired")

        if isinstance(exc, InvalidRefreshTokenError):
            return api_errors.Unauthorized(str(exc), code="refresh_token_invalid")

        if isinstance(exc, SessionMismatchError):
            return api_errors.Unauthorized(str(exc), code="session_mismatch")

        if isinstance(exc, TokenError):
            return api_errors.Unauthorized(str(exc), code="token_invalid")

        if isinstance(exc, CredentialStoreError):
            return api_errors.ServiceUnavailable(str(exc), code="credential_store_unavailable")

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
