"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

# At least one non-whitespace character.
not_blank = validate.Regexp(r"\s*\S", error="Must not be blank.")
# Marshmallow accepts dotless domains such as ``localhost``; accounts need a real domain.
dotted_domain = validate.Regexp(
    r"[^@\s]+@[^@\s]+\.[^@\s]+$", error="Email domain must contain a dot."
)


class SignUpSchema(Schema):
    """Input payload for account sign-up."""

    email = fields.Email(required=True, validate=[validate.Length(max=100), dotted_domain])
    password = fields.String(required=True, validate=[validate.Length(min=8, max=16), not_blank])
    name = fields.String(required=True, validate=[validate.Length(min=2, max=10), not_blank])


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=100))
    password = fields.String(required=True, validate=validate.Length(min=1))


class RefreshSchema(Schema):
    refresh_token = fields.String(required=True, validate=validate.Length(min=1))


class TokenPairSchema(Schema):
    """Response payload of a successful login."""

    grant_type = fields.String(required=True)
    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    access_token_expires_in = fields.Integer(required=True)


class AccessTokenSchema(Schema):
    """Response payload of a refresh."""

    grant_type = fields.String(load_default="Bearer", dump_default="Bearer")
    access_token = fields.String(required=True)
