"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_millis(name: str, default: int) -> timedelta:
    """Read a lifetime expressed in milliseconds and return it as a ``timedelta``.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: int
        Milliseconds used when the variable is unset or blank.

    Returns
    -------
    datetime.timedelta
        Parsed lifetime.

    Raises
    ------
    ValueError
        If the variable is set but is not a positive integer.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return timedelta(milliseconds=default)
    value = int(raw.strip())
    if value <= 0:
        raise ValueError(f"{name} must be a positive number of milliseconds.")
    return timedelta(milliseconds=value)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing. Defaults to a development-safe
        placeholder and should be overridden in production.
    JWT_SECRET_KEY: str
        Shared HMAC secret used by ``flask-jwt-extended`` to sign and verify
        access and refresh tokens.
    JWT_ALGORITHM: str
        Fixed signing algorithm (``HS256``). Tokens signed with anything else
        are rejected as unsupported.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access token lifetime, read from ``JWT_ACCESS_TOKEN_VALIDITY_MS``.
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Refresh token lifetime, read from ``JWT_REFRESH_TOKEN_VALIDITY_MS``.
    REDIS_URL: str | None
        Credential store connection URL. When unset the client is not created
        and token endpoints answer ``503``.
    REDIS_SOCKET_TIMEOUT: float
        Per-command socket timeout in seconds for the Redis client.
    AUTH_REFRESH_KEY_PREFIX: str
        Key prefix for stored refresh tokens (``RT:{subject}``).
    AUTH_BLACKLIST_KEY_PREFIX: str
        Key prefix for blacklisted access tokens (``BL:{token}``).
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    SQLALCHEMY_TRACK_MODIFICATIONS: bool
        Disabled to avoid extra overhead from the event system.
    SQLALCHEMY_ECHO: bool
        When ``True`` SQLAlchemy logs SQL statements for debugging.
    JSON_SORT_KEYS: bool
        Keeps JSON output order stable when ``False``.
    PROPAGATE_EXCEPTIONS: bool
        Controls Flask error propagation.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_SECRET_AT_LEAST_32_BYTES")
    JWT_ALGORITHM = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES = env_millis("JWT_ACCESS_TOKEN_VALIDITY_MS", 30 * 60 * 1000)
    JWT_REFRESH_TOKEN_EXPIRES = env_millis(
        "JWT_REFRESH_TOKEN_VALIDITY_MS", 7 * 24 * 60 * 60 * 1000
    )

    # Credential store
    REDIS_URL = os.getenv("REDIS_URL")
    REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "3"))
    AUTH_REFRESH_KEY_PREFIX = os.getenv("AUTH_REFRESH_KEY_PREFIX", "RT:")
    AUTH_BLACKLIST_KEY_PREFIX = os.getenv("AUTH_BLACKLIST_KEY_PREFIX", "BL:")

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )
    CORS_MAX_AGE = 3600

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and points at a local Redis instance unless
    ``REDIS_URL`` says otherwise.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` unset; the test suite installs a fake client.
    - Disables rate limiting and propagates exceptions so pytest can surface
      tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy-0123456789"
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
