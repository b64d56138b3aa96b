"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import IdentitySchema, LoginSchema, SessionSchema, TokenPairSchema
from .user import UserCreateSchema, UserSchema

__all__ = [
    "IdentitySchema",
    "LoginSchema",
    "SessionSchema",
    "TokenPairSchema",
    "UserCreateSchema",
    "UserSchema",
]
