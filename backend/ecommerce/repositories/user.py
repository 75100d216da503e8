"""User repository: active-account lookups over :class:`User`."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from ecommerce.models.user import User
from ecommerce.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Every lookup ignores soft-deleted rows. It NEVER handles tokens or
    sessions, only DB-level account management.
    """

    model = User

    def _filterable_fields(self):
        return {
            "email": User.email,
            "public_id": User.public_id,
            "role": User.role,
            "deleted": User.deleted,
        }

    def _updatable_fields(self):
        # Password goes through its own setter, never through mass assignment.
        return {"name", "role"}

    def _soft_delete(self, instance: User) -> bool:
        instance.delete()
        return True

    # ---------------------------- Lookup helpers ----------------------------

    def get_active_by_public_id(self, public_id: str) -> User | None:
        """Fetch a non-deleted user by its public identifier.

        :param public_id: Externally visible UUID string.
        :type public_id: str
        :returns: User instance or ``None``.
        :rtype: User | None
        """
        stmt = select(User).where(User.public_id == public_id, User.deleted.is_(False))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_active_by_email(self, email: str) -> User | None:
        """Fetch a non-deleted user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None``.
        :rtype: User | None
        """
        stmt = select(User).where(
            User.email == email.lower().strip(), User.deleted.is_(False)
        )
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_active_by_email(self, email: str) -> bool:
        """Return ``True`` when a non-deleted user holds ``email``."""
        stmt = select(User.id).where(
            User.email == email.lower().strip(), User.deleted.is_(False)
        )
        return self.session.execute(stmt).first() is not None

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the active user matching ``email`` and ``password``, else ``None``."""
        user = self.get_active_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
