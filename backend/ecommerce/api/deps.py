"""Shared API helpers for responses, timing and access control."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from ecommerce.core.errors import Forbidden, Unauthorized
from ecommerce.core.security import current_identity
from ecommerce.services._shared.dto import AuthenticatedIdentity

F = TypeVar("F", bound=Callable[..., Any])


def authenticated_identity() -> AuthenticatedIdentity:
    """Return the caller established by the gate.

    :raises Unauthorized: For anonymous requests (401).
    """
    identity = current_identity()
    if identity is None:
        raise Unauthorized("Authentication required", code="authentication_required")
    return identity


def require_auth(func: F) -> F:
    """Reject anonymous requests with 401."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        authenticated_identity()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(role: str) -> Callable[[F], F]:
    """Reject anonymous requests with 401 and callers lacking ``role`` with 403."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not authenticated_identity().has_role(role):
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
