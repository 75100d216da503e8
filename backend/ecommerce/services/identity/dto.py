"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserSignUpIn:
    """
    Input DTO for user sign-up.

    :param email: Login email (normalized to lowercase).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param name: Display name.
    :type name: str
    """

    email: str
    password: str
    name: str


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    """
    Input DTO for credential verification.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Output DTO representing public-safe user data.

    :param public_id: Externally visible identifier.
    :type public_id: str
    :param email: Email address.
    :type email: str
    :param name: Display name.
    :type name: str
    :param role: Role name (``USER`` or ``ADMIN``).
    :type role: str
    :param created_at: Sign-up timestamp.
    :type created_at: datetime | None
    """

    public_id: str
    email: str
    name: str
    role: str
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class UserAuthOut:
    """
    Output DTO for a successful credential check.

    :param public_id: Token subject.
    :type public_id: str
    :param authorities: Authorities to embed in tokens.
    :type authorities: tuple[str, ...]
    """

    public_id: str
    authorities: tuple[str, ...]
