from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from ecommerce.services._shared.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    UnsupportedTokenError,
)
from ecommerce.services._shared.ports import TokenCodec, TokenType


@dataclass(slots=True)
class FlaskJWTTokenCodec(TokenCodec):
    """
    Adapter for Flask-JWT-Extended.

    Signing key and algorithm come from ``JWT_SECRET_KEY`` / ``JWT_ALGORITHM``;
    the library adds ``type``, ``jti``, ``iat`` and ``nbf`` claims.

    .. note::
       Requires an active Flask app context with the JWT manager initialised.
    """

    def encode(
        self,
        *,
        subject: str,
        token_type: TokenType,
        claims: dict[str, Any],
        expires_delta: timedelta,
    ) -> str:
        if token_type == "refresh":
            token = create_refresh_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            )
        else:
            token = create_access_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            )
        return cast(str, token)

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        # InvalidSignatureError derives from DecodeError, so order matters.
        try:
            return cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
        except pyjwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except pyjwt.InvalidSignatureError as exc:
            raise InvalidSignatureError() from exc
        except pyjwt.InvalidAlgorithmError as exc:
            raise UnsupportedTokenError("Unsupported token algorithm") from exc
        except pyjwt.DecodeError as exc:
            raise MalformedTokenError() from exc
        except (pyjwt.InvalidTokenError, JWTDecodeError) as exc:
            raise InvalidTokenError(str(exc) or None) from exc
