"""Administrative endpoints restricted to ``ROLE_ADMIN``."""

from __future__ import annotations

from flask import Blueprint

from ecommerce.api.deps import require_role, timing
from ecommerce.core.security import get_token_service
from ecommerce.services import AuthService

bp = Blueprint("admin", __name__, url_prefix="/admin")


@bp.delete("/users/<string:public_id>")
@require_role("ADMIN")
@timing
def deactivate_user(public_id: str):
    """Soft-delete a user and revoke their refresh session."""

    AuthService(tokens=get_token_service()).deactivate(public_id)
    return "", 204
