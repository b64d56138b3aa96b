"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from sessiongate.models.user import Role


class UserCreateSchema(Schema):
    """Payload for registering a new user."""

    email = fields.Email(required=True, validate=validate.Length(max=320))
    phone_number = fields.String(
        load_default=None, validate=validate.Regexp(r"^\+?[0-9 ().-]{3,20}$")
    )
    first_name = fields.String(required=True, validate=validate.Length(min=1, max=30))
    last_name = fields.String(required=True, validate=validate.Length(min=1, max=30))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    role = fields.String(
        load_default=Role.USER.value, validate=validate.OneOf([r.value for r in Role])
    )


class UserSchema(Schema):
    """Public representation of a user (never the password hash)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    phone_number = fields.String(allow_none=True)
    first_name = fields.String(required=True)
    last_name = fields.String(required=True)
    role = fields.String(required=True)
