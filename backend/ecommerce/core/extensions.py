"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

REDIS_EXTENSION_KEY = "redis_client"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, rate limiting and Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`ecommerce.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Raises
    ------
    RuntimeError
        If ``REDIS_URL`` is configured but the server does not answer ``PING``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from ecommerce import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        log.warning("REDIS_URL is not configured; credential store disabled")
        return

    client = redis.Redis.from_url(
        redis_url,
        decode_responses=True,
        socket_timeout=app.config.get("REDIS_SOCKET_TIMEOUT", 3),
        socket_connect_timeout=app.config.get("REDIS_SOCKET_TIMEOUT", 3),
    )
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client


def get_redis(app: Flask | None = None) -> redis.Redis:
    """Return the Redis client bound to ``app`` (defaults to ``current_app``).

    Raises
    ------
    RuntimeError
        If no client was initialized for the application.
    """
    target = app or current_app
    client = target.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Configure REDIS_URL.")
    return client
