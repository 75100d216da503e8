"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserSchema(Schema):
    """Public representation of a user."""

    public_id = fields.String(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    role = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
