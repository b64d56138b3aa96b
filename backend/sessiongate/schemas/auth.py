"""Session-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class LoginSchema(Schema):
    """Input payload for opening a session.

    One identifier is required; when both are sent the email is used.
    """

    email = fields.Email(load_default=None, validate=validate.Length(max=320))
    phone_number = fields.String(load_default=None, validate=validate.Length(min=3, max=20))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))

    @validates_schema
    def _require_identifier(self, data, **kwargs):
        if not data.get("email") and not data.get("phone_number"):
            raise ValidationError("Either email or phone_number is required.", "_schema")


class TokenPairSchema(Schema):
    """Response payload containing the issued tokens."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    session_id = fields.Integer()
    token_type = fields.String(dump_default="bearer")


class IdentitySchema(Schema):
    """The authenticated identity decoded from the access token."""

    user_id = fields.Integer(required=True)
    session_id = fields.Integer(required=True)
    role = fields.String(required=True)
    email = fields.String(allow_none=True)
    phone_number = fields.String(allow_none=True)
    first_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)


class SessionSchema(Schema):
    """Operator view of a login session."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    user_client = fields.String(allow_none=True)
    is_valid = fields.Boolean(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
