from __future__ import annotations

from datetime import timedelta
from typing import Any, Literal, Protocol

TokenType = Literal["access", "refresh"]


class TokenCodec(Protocol):
    """Port for signing and parsing expiring claim sets."""

    def encode(
        self,
        *,
        subject: str,
        token_type: TokenType,
        claims: dict[str, Any],
        expires_delta: timedelta,
    ) -> str:
        """Sign a token for ``subject`` that expires ``expires_delta`` from now."""

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        """
        Verify ``token`` and return its claims.

        :param allow_expired: Skip the expiry check (signature and shape are
            still verified).
        :raises ExpiredTokenError: Past ``exp`` unless ``allow_expired``.
        :raises InvalidSignatureError: Signature does not match the key.
        :raises UnsupportedTokenError: Signed with another algorithm.
        :raises MalformedTokenError: Not a decodable compact JWS.
        :raises InvalidTokenError: Any other claim violation.
        """
