"""HTTP API package: mounts each versioned blueprint set under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """Join URL path segments into a single absolute prefix.

    Blank segments are skipped, so ``join_prefix("/api", "v1", "")`` is
    ``"/api/v1"`` and a blueprint registered with it sits at the version root.
    """
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def mount_version(
    app: Flask,
    version: str,
    registry: Iterable[tuple[Blueprint, str]],
) -> list[str]:
    """Register every ``(blueprint, relative_prefix)`` pair of one API version.

    :param app: Application receiving the blueprints.
    :param version: Version segment such as ``"v1"``.
    :param registry: Blueprints with their prefix relative to the version root.
    :returns: The mounted prefixes, in registration order.
    """
    base = app.config.get("API_BASE_PREFIX", "/api")
    mounted = []
    for bp, rel_prefix in registry:
        prefix = join_prefix(base, version, rel_prefix)
        app.register_blueprint(bp, url_prefix=prefix)
        mounted.append(prefix)
    return mounted


def init_app(app: Flask) -> None:
    """Mount the available API versions on the Flask app."""

    from ecommerce.api.v1 import API_VERSION as V1
    from ecommerce.api.v1 import REGISTRY as V1_REGISTRY

    mount_version(app, V1, V1_REGISTRY)


__all__ = ["init_app", "join_prefix", "mount_version"]
