# ecommerce/services/tokens/service.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from ecommerce.services._shared.dto import AuthenticatedIdentity
from ecommerce.services._shared.errors import (
    BlacklistedTokenError,
    CredentialStoreError,
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    MalformedTokenError,
    MissingAuthorityError,
    SessionMismatchError,
    UnsupportedTokenError,
)
from ecommerce.services._shared.ports import CredentialStore, TokenCodec
from ecommerce.services.tokens.dto import AuthTokenConfig, TokenPairOut

log = logging.getLogger(__name__)

GRANT_TYPE = "Bearer"
AUTHORITIES_CLAIM = "auth"
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenService:
    """
    JWT session lifecycle: issue, authenticate, validate, refresh, revoke.

    Tokens are signed by a :class:`TokenCodec`; the only server-side state is
    the :class:`CredentialStore` (one refresh token per subject plus the
    logout blacklist). The service itself keeps no mutable state, so a single
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        store: CredentialStore,
        cfg: AuthTokenConfig,
    ) -> None:
        self.codec = codec
        self.store = store
        self.cfg = cfg

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(self, subject: str, authorities: Iterable[str]) -> TokenPairOut:
        """
        Sign a fresh access/refresh pair and persist the refresh token.

        The stored refresh token replaces any previous one for ``subject``.

        :param subject: Token subject (user public id).
        :param authorities: Authorities such as ``["ROLE_USER"]``.
        :returns: Token pair with the access expiry in epoch milliseconds.
        :raises CredentialStoreError: If the refresh token cannot be stored.
        """
        now = self._now()
        claims = {AUTHORITIES_CLAIM: ",".join(authorities)}

        access = self.codec.encode(
            subject=subject,
            token_type=ACCESS_TOKEN_TYPE,
            claims=claims,
            expires_delta=self.cfg.access_expires,
        )
        refresh = self.codec.encode(
            subject=subject,
            token_type=REFRESH_TOKEN_TYPE,
            claims=claims,
            expires_delta=self.cfg.refresh_expires,
        )
        self.store.save_refresh_token(subject, refresh, self.cfg.refresh_expires)

        log.info("token.issued subject=%s", subject, extra={"subject": subject})
        return TokenPairOut(
            grant_type=GRANT_TYPE,
            access_token=access,
            refresh_token=refresh,
            access_token_expires_in=int((now + self.cfg.access_expires).timestamp() * 1000),
        )

    # ------------------------------------------------------------------ #
    # Authentication / validation
    # ------------------------------------------------------------------ #

    def authenticate(self, access_token: str) -> AuthenticatedIdentity:
        """
        Build the caller identity from a verified access token.

        Does not consult the blacklist; pair with :meth:`is_valid`.

        :raises InvalidTokenError: Bad signature, shape, algorithm or a
            non-access token (``UnsupportedTokenError``).
        :raises ExpiredTokenError: Past expiry.
        :raises MissingAuthorityError: No ``auth`` claim.
        """
        claims = self.codec.decode(access_token)
        if claims.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            raise UnsupportedTokenError("Access token required")
        return AuthenticatedIdentity(
            subject=str(claims["sub"]),
            authorities=self._authorities(claims),
        )

    def verify(self, token: str) -> None:
        """
        Raise if ``token`` is blacklisted, expired or cannot be verified.

        The blacklist is consulted before any cryptographic check.

        :raises BlacklistedTokenError: The token was revoked by logout.
        :raises CredentialStoreError: The blacklist cannot be read.
        """
        if self.store.is_blacklisted(token):
            raise BlacklistedTokenError()
        self.codec.decode(token)

    def is_valid(self, token: str) -> bool:
        """Boolean form of :meth:`verify`. Store failures count as invalid."""
        try:
            self.verify(token)
        except BlacklistedTokenError:
            log.info("Rejected blacklisted JWT token")
        except ExpiredTokenError:
            log.info("Expired JWT token")
        except InvalidSignatureError:
            log.warning("Invalid JWT signature")
        except MalformedTokenError:
            log.warning("Malformed JWT token")
        except UnsupportedTokenError:
            log.warning("Unsupported JWT token")
        except InvalidTokenError as exc:
            log.warning("Invalid JWT token: %s", exc)
        except CredentialStoreError:
            log.error("Credential store unavailable while validating a token")
        else:
            return True
        return False

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> str:
        """
        Mint a new access token from the subject's current refresh token.

        The refresh token itself is not rotated. The new access token carries
        the authorities embedded in the refresh token.

        :raises InvalidRefreshTokenError: The refresh token fails :meth:`is_valid`.
        :raises UnsupportedTokenError: The token is not a refresh token.
        :raises SessionMismatchError: No stored refresh token for the subject,
            or a different one (superseded by a later login, or logged out).
        :raises MissingAuthorityError: The refresh token carries no ``auth``.
        """
        if not self.is_valid(refresh_token):
            raise InvalidRefreshTokenError()

        claims = self.codec.decode(refresh_token)
        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise UnsupportedTokenError("Refresh token required")

        subject = str(claims["sub"])
        stored = self.store.get_refresh_token(subject)
        if stored is None or stored != refresh_token:
            log.warning("Refresh token mismatch for subject=%s", subject)
            raise SessionMismatchError()

        authorities = self._authorities(claims)
        access = self.codec.encode(
            subject=subject,
            token_type=ACCESS_TOKEN_TYPE,
            claims={AUTHORITIES_CLAIM: ",".join(sorted(authorities))},
            expires_delta=self.cfg.access_expires,
        )
        log.info("token.refreshed subject=%s", subject, extra={"subject": subject})
        return access

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(self, access_token: str) -> None:
        """
        Log the subject out.

        Deletes the stored refresh token and blacklists ``access_token`` for
        the rest of its lifetime. Expired tokens are accepted; forged or
        malformed ones are not.

        :raises InvalidTokenError: Bad signature, shape or algorithm.
        :raises CredentialStoreError: The store cannot be reached.
        """
        claims = self.codec.decode(access_token, allow_expired=True)
        subject = str(claims["sub"])

        self.store.delete_refresh_token(subject)
        remaining = self._remaining(claims)
        if remaining > timedelta(0):
            self.store.blacklist(access_token, remaining)

        log.info("token.revoked subject=%s", subject, extra={"subject": subject})

    def end_session(self, subject: str) -> None:
        """
        Drop the stored refresh token of ``subject`` so it can no longer refresh.

        Access tokens already handed out stay valid until they expire.

        :raises CredentialStoreError: The store cannot be reached.
        """
        self.store.delete_refresh_token(subject)
        log.info("token.session_ended subject=%s", subject, extra={"subject": subject})

    def remaining_lifetime(self, token: str) -> timedelta:
        """Time left until ``token`` expires (zero or negative once expired)."""
        return self._remaining(self.codec.decode(token, allow_expired=True))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    def _remaining(self, claims: dict[str, Any]) -> timedelta:
        expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        return expires_at - self._now()

    @staticmethod
    def _authorities(claims: dict[str, Any]) -> frozenset[str]:
        raw = claims.get(AUTHORITIES_CLAIM)
        if not isinstance(raw, str):
            raise MissingAuthorityError()
        authorities = frozenset(a.strip() for a in raw.split(",") if a.strip())
        if not authorities:
            raise MissingAuthorityError()
        return authorities
