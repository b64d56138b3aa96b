"""
Session lifecycle wiring.

``init_app`` assembles a :class:`SessionService` from application config and
stores it in ``app.extensions["session_service"]``; request handlers and the
authenticator middleware obtain it through :func:`get_session_service`.

Adapters are imported here rather than from the service package so that
``sessiongate.services`` never depends on ``sessiongate.infra``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from flask import Flask, current_app

from sessiongate.core.config import JWT_SECRET_ENV
from sessiongate.core.extensions import get_redis
from sessiongate.infra.jwt.jwt_token_codec import JWTTokenCodec
from sessiongate.infra.redis.redis_session_store import RedisSessionStore
from sessiongate.infra.sqlalchemy.sql_session_store import SQLAlchemySessionStore
from sessiongate.infra.sqlalchemy.sql_user_directory import SQLAlchemyUserDirectory
from sessiongate.services._shared.errors import ConfigurationError
from sessiongate.services._shared.ports import KeyLoader, SessionStore, TokenSettings
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.sessions import SessionService

EXTENSION_KEY = "session_service"


def make_key_loader(config: Mapping[str, Any]) -> KeyLoader:
    """
    Return a loader reading the signing secret on every call.

    The process environment wins over ``config`` so a rotated secret is
    picked up without rebuilding the app.
    """

    def load() -> str | None:
        return os.environ.get(JWT_SECRET_ENV) or config.get(JWT_SECRET_ENV) or None

    return load


def token_settings_from_config(config: Mapping[str, Any]) -> TokenSettings:
    """Build :class:`TokenSettings` from Flask config values."""
    return TokenSettings(
        key_loader=make_key_loader(config),
        algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
        access_ttl=timedelta(seconds=int(config.get("ACCESS_TOKEN_TTL", 3600))),
        refresh_ttl=timedelta(seconds=int(config.get("REFRESH_TOKEN_TTL", 7 * 24 * 3600))),
        leeway=timedelta(seconds=int(config.get("JWT_LEEWAY", 0))),
    )


def build_session_store(config: Mapping[str, Any]) -> SessionStore:
    """
    Select the session backend from ``SESSION_STORE``.

    :raises ConfigurationError: For an unknown backend name.
    """
    backend = str(config.get("SESSION_STORE", "sql")).strip().lower()
    if backend == "sql":
        return SQLAlchemySessionStore()
    if backend == "redis":
        return RedisSessionStore(get_redis())
    raise ConfigurationError(f"Unknown SESSION_STORE {backend!r}")


def init_app(app: Flask) -> None:
    """Register the session service on ``app``."""
    service = SessionService(
        users=SQLAlchemyUserDirectory(),
        sessions=build_session_store(app.config),
        codec=JWTTokenCodec(token_settings_from_config(app.config)),
        hasher=CredentialHasher(app.config.get("PASSWORD_HASH_METHOD", "scrypt")),
    )
    app.extensions[EXTENSION_KEY] = service


def get_session_service() -> SessionService:
    """Return the service bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "build_session_store",
    "get_session_service",
    "init_app",
    "make_key_loader",
    "token_settings_from_config",
]
