from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class CredentialStore(Protocol):
    """
    Key-value store holding server-side session state.

    Two independent keyspaces with store-native expiry:

    * one refresh token per subject (a new write replaces the previous one);
    * blacklisted access tokens, kept until the token would have expired.

    Implementations raise :class:`~ecommerce.services._shared.errors.CredentialStoreError`
    when the backend cannot be reached.
    """

    def save_refresh_token(self, subject: str, token: str, ttl: timedelta) -> None: ...

    def get_refresh_token(self, subject: str) -> str | None: ...

    def delete_refresh_token(self, subject: str) -> None: ...

    def blacklist(self, token: str, ttl: timedelta) -> None: ...

    def is_blacklisted(self, token: str) -> bool: ...
