"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import AccessTokenSchema, LoginSchema, RefreshSchema, SignUpSchema, TokenPairSchema
from .user import UserSchema

__all__ = [
    "AccessTokenSchema",
    "LoginSchema",
    "RefreshSchema",
    "SignUpSchema",
    "TokenPairSchema",
    "UserSchema",
]
