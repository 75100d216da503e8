# ecommerce/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO returned by a successful login.

    :param grant_type: Authorization scheme clients must use (``"Bearer"``).
    :type grant_type: str
    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param access_token_expires_in: Access token expiry as epoch milliseconds.
    :type access_token_expires_in: int
    """

    grant_type: str
    access_token: str
    refresh_token: str
    access_token_expires_in: int


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta
    refresh_expires: timedelta
