"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text

from ecommerce.api.deps import json_response, timing
from ecommerce.core.extensions import REDIS_EXTENSION_KEY, db

bp = Blueprint("health", __name__)


def _redis_status() -> str:
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        return "disabled"
    try:
        client.ping()
    except RedisError:
        current_app.logger.exception("healthcheck.redis_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and credential store health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    redis_status = _redis_status()
    status = "ok" if db_status == "ok" and redis_status == "ok" else "degraded"
    payload = {
        "status": status,
        "db": db_status,
        "redis": redis_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload)
