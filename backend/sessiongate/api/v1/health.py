"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from sessiongate.api.deps import json_response, timing
from sessiongate.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return database (and Redis, when configured) health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    payload = {"status": "ok", "db": db_status}
    if current_app.config.get("REDIS_URL"):
        try:
            get_redis().ping()
            payload["redis"] = "ok"
        except (RedisError, RuntimeError):  # pragma: no cover - depends on Redis
            current_app.logger.exception("healthcheck.redis_error")
            payload["redis"] = "fail"

    if "fail" in payload.values():
        payload["status"] = "degraded"
    payload["version"] = current_app.config.get("APP_VERSION", "dev")
    return json_response(payload, status=200 if payload["status"] == "ok" else 503)
