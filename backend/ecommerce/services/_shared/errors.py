"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories,
adapters and application services.

The translation to HTTP responses (RFC 7807) is handled by
``ecommerce/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError mentions the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - ``BaseService.translate_exceptions`` maps them to ``APIError``.
    """


# --------------------------------------------------------------------------- #
# Directory errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class InvalidCredentialsError(ServiceError):
    """Raised when an email/password pair does not match an active user."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class CredentialStoreError(ServiceError):
    """Raised when the key-value credential store cannot be reached."""

    def __init__(self, message: str = "Credential store unavailable") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Token errors
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base class for every failure while handling a bearer or refresh token."""

    default_message = "Token rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidTokenError(TokenError):
    """The token cannot be trusted (bad signature, shape, algorithm, type...)."""

    default_message = "Invalid token"


class InvalidSignatureError(InvalidTokenError):
    default_message = "Invalid token signature"


class MalformedTokenError(InvalidTokenError):
    default_message = "Malformed token"


class UnsupportedTokenError(InvalidTokenError):
    default_message = "Unsupported token"


class ExpiredTokenError(InvalidTokenError):
    default_message = "Token has expired"


class BlacklistedTokenError(InvalidTokenError):
    default_message = "Token has been revoked"


class InvalidRefreshTokenError(InvalidTokenError):
    """A refresh request carried a token that fails validation."""

    default_message = "Refresh token is invalid"


class MissingAuthorityError(TokenError):
    """The token is authentic but carries no ``auth`` claim."""

    default_message = "Token carries no authorities"


class SessionMismatchError(TokenError):
    """The presented refresh token is not the one stored for its subject."""

    default_message = "Refresh token does not match the active session"
