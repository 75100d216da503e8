"""Service layer public API.

Callers import from :mod:`ecommerce.services` without knowing the internal
structure.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`,
  :class:`AuthenticatedIdentity`
- Token lifecycle: :class:`TokenService`, :class:`TokenPairOut`,
  :class:`AuthTokenConfig`
- User directory: :class:`IdentityService` and its DTOs
- Auth use cases: :class:`AuthService` and its DTOs
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import AuthenticatedIdentity
from .auth import AuthService, LoginIn, LogoutIn, RefreshIn
from .identity import IdentityService, UserAuthIn, UserAuthOut, UserPublicOut, UserSignUpIn
from .tokens import AuthTokenConfig, TokenPairOut, TokenService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "AuthenticatedIdentity",
    # Tokens
    "TokenService",
    "TokenPairOut",
    "AuthTokenConfig",
    # Identity
    "IdentityService",
    "UserSignUpIn",
    "UserAuthIn",
    "UserPublicOut",
    "UserAuthOut",
    # Auth
    "AuthService",
    "LoginIn",
    "RefreshIn",
    "LogoutIn",
]
