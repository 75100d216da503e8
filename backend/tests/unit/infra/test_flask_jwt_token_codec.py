"""Unit tests for FlaskJWTTokenCodec: claims layout and error mapping."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from freezegun import freeze_time

from ecommerce.infra.jwt import FlaskJWTTokenCodec
from ecommerce.services._shared.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    UnsupportedTokenError,
)


@pytest.fixture
def codec() -> FlaskJWTTokenCodec:
    return FlaskJWTTokenCodec()


def _encode(codec, token_type="access", expires=timedelta(minutes=5)) -> str:
    return codec.encode(
        subject="u-1",
        token_type=token_type,
        claims={"auth": "ROLE_USER"},
        expires_delta=expires,
    )


def test_roundtrip_keeps_subject_type_and_authorities(app, codec):
    claims = codec.decode(_encode(codec))

    assert claims["sub"] == "u-1"
    assert claims["type"] == "access"
    assert claims["auth"] == "ROLE_USER"
    assert "jti" in claims


def test_refresh_tokens_are_typed(app, codec):
    claims = codec.decode(_encode(codec, token_type="refresh"))

    assert claims["type"] == "refresh"
    assert claims["auth"] == "ROLE_USER"


def test_token_is_signed_with_hs256(app, codec):
    header = pyjwt.get_unverified_header(_encode(codec))

    assert header["alg"] == "HS256"


def test_expired_token_maps_to_expired_error(app, codec):
    with freeze_time("2026-01-01 12:00:00"):
        token = _encode(codec, expires=timedelta(minutes=1))
    with freeze_time("2026-01-01 12:02:00"), pytest.raises(ExpiredTokenError):
        codec.decode(token)


def test_allow_expired_returns_claims(app, codec):
    with freeze_time("2026-01-01 12:00:00"):
        token = _encode(codec, expires=timedelta(minutes=1))
    with freeze_time("2026-01-01 12:02:00"):
        claims = codec.decode(token, allow_expired=True)

    assert claims["sub"] == "u-1"


def test_foreign_key_maps_to_invalid_signature(app, codec):
    forged = pyjwt.encode(
        {"sub": "u-1", "type": "access", "auth": "ROLE_ADMIN",
         "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "another-secret-key-with-enough-entropy-9876543210",
        algorithm="HS256",
    )

    with pytest.raises(InvalidSignatureError):
        codec.decode(forged)


def test_other_algorithm_maps_to_unsupported(app, codec):
    token = pyjwt.encode(
        {"sub": "u-1", "type": "access", "auth": "ROLE_USER",
         "exp": datetime.now(UTC) + timedelta(minutes=5)},
        app.config["JWT_SECRET_KEY"],
        algorithm="HS512",
    )

    with pytest.raises(UnsupportedTokenError):
        codec.decode(token)


@pytest.mark.parametrize("garbage", ["not-a-jwt", "a.b.c", ""])
def test_garbage_maps_to_malformed(app, codec, garbage):
    with pytest.raises(MalformedTokenError):
        codec.decode(garbage)


def test_every_mapped_error_is_an_invalid_token_error():
    for exc_type in (ExpiredTokenError, InvalidSignatureError, MalformedTokenError, UnsupportedTokenError):
        assert issubclass(exc_type, InvalidTokenError)
