"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from sessiongate.api.deps import json_response, timing
from sessiongate.api.middleware import require_user
from sessiongate.core.errors import APIError
from sessiongate.schemas import UserCreateSchema, UserSchema
from sessiongate.services._shared.errors import ServiceError
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.users import UserRegistrationIn, UserService

bp = Blueprint("users", __name__)

create_schema = UserCreateSchema()
user_schema = UserSchema()


def _service() -> UserService:
    return UserService(hasher=CredentialHasher(current_app.config["PASSWORD_HASH_METHOD"]))


@bp.post("")
@timing
def create_user():
    """Register a user and return its public representation."""

    payload = create_schema.load(request.get_json(silent=True) or {})
    service = _service()
    try:
        user = service.register(UserRegistrationIn(**payload))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    except ValueError as exc:
        # model-level normalisation rejected a value the schema let through
        raise APIError(str(exc), status_code=422, code="validation_error") from exc
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.get("/<int:user_id>")
@require_user
@timing
def get_user(user_id: int):
    """Return one user."""

    service = _service()
    try:
        user = service.get(user_id)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response({"data": user_schema.dump(user)})
