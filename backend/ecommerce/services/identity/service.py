"""
IdentityService
===============

Application service for the ``User`` aggregate:
- Sign-up with email uniqueness among active accounts
- Lookups by public id or email (soft-deleted accounts are invisible)
- Credential verification (no token issuance)
- Soft deletion
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ecommerce.models.user import User, UserRole
from ecommerce.repositories.user import UserRepository
from ecommerce.services._shared.base import BaseService
from ecommerce.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    violates,
)
from ecommerce.services.identity.dto import (
    UserAuthIn,
    UserAuthOut,
    UserPublicOut,
    UserSignUpIn,
)

log = logging.getLogger(__name__)


def _to_public(user: User) -> UserPublicOut:
    return UserPublicOut(
        public_id=user.public_id,
        email=user.email,
        name=user.name,
        role=user.role.value,
        created_at=user.created_at,
    )


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    Responsibilities
    ----------------
    - Sign users up ensuring email uniqueness among active accounts.
    - Authenticate credentials.
    - Retrieve users safely and soft-delete them.
    """

    # --------------------------------------------------------------------- #
    # Sign-up
    # --------------------------------------------------------------------- #

    def sign_up(self, dto: UserSignUpIn, *, role: UserRole = UserRole.USER) -> UserPublicOut:
        """
        Register a new user.

        :param dto: Sign-up input DTO.
        :type dto: UserSignUpIn
        :param role: Role to grant. Only the admin CLI passes ``ADMIN``.
        :type role: UserRole
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises ConflictError: When an active user already holds the email.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_active_by_email(dto.email):
                raise ConflictError("User", "email already in use")

            try:
                user = repo.add(
                    User(email=dto.email, password=dto.password, name=dto.name, role=role)
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email_active") or violates(exc, "users.email"):
                    raise ConflictError("User", "email already in use") from exc
                raise

            out = _to_public(user)

        log.info("user.signed_up public_id=%s role=%s", out.public_id, out.role)
        return out

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def authenticate(self, dto: UserAuthIn) -> UserAuthOut:
        """
        Verify an email/password pair.

        :raises InvalidCredentialsError: Unknown, deleted or wrong password.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                raise InvalidCredentialsError()
            return UserAuthOut(public_id=user.public_id, authorities=tuple(user.authorities))

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_by_public_id(self, public_id: str) -> UserPublicOut:
        """
        :raises NotFoundError: If no active user has ``public_id``.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_active_by_public_id(public_id)
            if user is None:
                raise NotFoundError("User", public_id)
            return _to_public(user)

    def get_by_email(self, email: str) -> UserPublicOut:
        """
        :raises NotFoundError: If no active user has ``email``.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_active_by_email(email)
            if user is None:
                raise NotFoundError("User", email)
            return _to_public(user)

    # --------------------------------------------------------------------- #
    # Soft delete
    # --------------------------------------------------------------------- #

    def deactivate(self, public_id: str) -> None:
        """
        Soft-delete a user. Their email becomes available for a new sign-up.

        :raises NotFoundError: If no active user has ``public_id``.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_active_by_public_id(public_id)
            if user is None:
                raise NotFoundError("User", public_id)
            repo.delete(user)

        log.info("user.deactivated public_id=%s", public_id)
