"""User directory endpoints."""

from __future__ import annotations

from flask import Blueprint

from ecommerce.api.deps import json_response, require_auth, timing
from ecommerce.api.v1.auth import sign_up_from_request
from ecommerce.schemas import UserSchema
from ecommerce.services import IdentityService

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()


@bp.post("/signup")
@timing
def signup():
    """Create an account with the ``USER`` role."""

    return sign_up_from_request()


@bp.get("/<string:public_id>")
@require_auth
@timing
def get_user(public_id: str):
    """Return an active user by public id."""

    user = IdentityService().get_by_public_id(public_id)
    return json_response({"data": user_schema.dump(user)})


@bp.get("/email/<string:email>")
@require_auth
@timing
def get_user_by_email(email: str):
    """Return an active user by email."""

    user = IdentityService().get_by_email(email)
    return json_response({"data": user_schema.dump(user)})
