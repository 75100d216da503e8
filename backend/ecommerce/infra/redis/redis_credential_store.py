from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from ecommerce.services._shared.errors import CredentialStoreError
from ecommerce.services._shared.ports import CredentialStore

log = logging.getLogger(__name__)

LOGOUT_MARKER = "logout"


def _millis(ttl: timedelta) -> int:
    return int(ttl.total_seconds() * 1000)


@dataclass(slots=True)
class RedisCredentialStore(CredentialStore):
    """
    Redis-backed credential store.

    Keys are plain strings with a native ``PX`` expiry:
    ``{refresh_prefix}{subject}`` holds the refresh token and
    ``{blacklist_prefix}{access token}`` holds ``"logout"``.

    :param r: A Redis client created with ``decode_responses=True``.
    :param refresh_prefix: Key prefix of stored refresh tokens.
    :param blacklist_prefix: Key prefix of blacklisted access tokens.
    """

    r: redis.Redis
    refresh_prefix: str = "RT:"
    blacklist_prefix: str = "BL:"

    def _rk(self, subject: str) -> str:
        return f"{self.refresh_prefix}{subject}"

    def _bk(self, token: str) -> str:
        return f"{self.blacklist_prefix}{token}"

    def save_refresh_token(self, subject: str, token: str, ttl: timedelta) -> None:
        try:
            self.r.set(self._rk(subject), token, px=_millis(ttl))
        except RedisError as exc:
            log.error("Credential store write failed for subject=%s", subject)
            raise CredentialStoreError() from exc

    def get_refresh_token(self, subject: str) -> str | None:
        try:
            return cast(str | None, self.r.get(self._rk(subject)))
        except RedisError as exc:
            log.error("Credential store read failed for subject=%s", subject)
            raise CredentialStoreError() from exc

    def delete_refresh_token(self, subject: str) -> None:
        try:
            self.r.delete(self._rk(subject))
        except RedisError as exc:
            log.error("Credential store delete failed for subject=%s", subject)
            raise CredentialStoreError() from exc

    def blacklist(self, token: str, ttl: timedelta) -> None:
        px = _millis(ttl)
        if px <= 0:
            # Already expired; the expiry check rejects it anyway.
            return
        try:
            self.r.set(self._bk(token), LOGOUT_MARKER, px=px)
        except RedisError as exc:
            log.error("Credential store blacklist write failed")
            raise CredentialStoreError() from exc

    def is_blacklisted(self, token: str) -> bool:
        try:
            return cast(int, self.r.exists(self._bk(token))) == 1
        except RedisError as exc:
            log.error("Credential store blacklist read failed")
            raise CredentialStoreError() from exc
