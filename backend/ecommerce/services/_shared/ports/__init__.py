"""
ecommerce.services._shared.ports
================================

*Ports* (hexagonal interfaces) the token lifecycle depends on.

- :mod:`token_codec`: :class:`~.TokenCodec`, signing and parsing of JWTs.
- :mod:`credential_store`: :class:`~.CredentialStore`, refresh tokens and
  the logout blacklist.

Concrete adapters live under ``ecommerce.infra``.
"""

from __future__ import annotations

from .credential_store import CredentialStore
from .token_codec import TokenCodec, TokenType

__all__ = ["CredentialStore", "TokenCodec", "TokenType"]
