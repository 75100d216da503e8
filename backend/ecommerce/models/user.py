"""User model for the e-commerce directory."""

from __future__ import annotations

import enum
from typing import Any
from uuid import uuid4

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, String, column, false
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from ecommerce.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin


class UserRole(str, enum.Enum):
    """Coarse-grained roles. Tokens carry them as ``ROLE_<name>`` authorities."""

    USER = "USER"
    ADMIN = "ADMIN"

    @property
    def authority(self) -> str:
        return f"ROLE_{self.value}"


class User(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    Registered shop account.

    Fields
    ------
    public_id : str
        Random UUID exposed to clients and used as the token subject.
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique among
        users that are not soft-deleted.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    name : str
        Display name.
    role : UserRole
        ``USER`` by default.
    """

    __tablename__ = "users"

    public_id: Mapped[str] = mapped_column(
        String(36), nullable=False, unique=True, default=lambda: str(uuid4())
    )
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role"), nullable=False, default=UserRole.USER
    )

    __table_args__ = (
        # A deleted account frees its email for a new sign-up.
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            sqlite_where=column("deleted") == false(),
            postgresql_where=column("deleted") == false(),
        ),
    )

    @property
    def authorities(self) -> list[str]:
        """Authorities granted to this user, in token form."""
        return [self.role.authority]

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()
