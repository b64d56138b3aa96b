"""Session endpoints: login, whoami, listing and logout."""

from __future__ import annotations

from flask import Blueprint, Response, request

from sessiongate.api.deps import json_response, timing
from sessiongate.api.middleware import current_identity, require_user
from sessiongate.core.errors import ServerFault, Unauthorized
from sessiongate.core.sessions import get_session_service
from sessiongate.schemas import IdentitySchema, LoginSchema, SessionSchema, TokenPairSchema
from sessiongate.services.sessions import LoginIn, LoginStatus

bp = Blueprint("sessions", __name__)

login_schema = LoginSchema()
token_schema = TokenPairSchema()
identity_schema = IdentitySchema()
sessions_schema = SessionSchema(many=True)

USER_CLIENT_MAX = 512


@bp.post("")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    user_client = (request.headers.get("User-Agent") or "")[:USER_CLIENT_MAX] or None
    result = get_session_service().login(
        LoginIn(
            secret=data["password"],
            email=data.get("email"),
            phone_number=data.get("phone_number"),
            user_client=user_client,
        )
    )
    if result.status is LoginStatus.INVALID_CREDENTIALS:
        raise Unauthorized("Invalid login")
    if result.status is LoginStatus.SERVER_FAULT or result.tokens is None:
        raise ServerFault()
    body = {"data": token_schema.dump(result.tokens)}
    return json_response(body, status=201)


@bp.get("/current")
@require_user
@timing
def whoami():
    """Return the identity decoded from the access token."""

    return json_response({"data": identity_schema.dump(current_identity())})


@bp.delete("/current")
@require_user
@timing
def logout():
    """Invalidate the session behind the current access token."""

    identity = current_identity()
    get_session_service().logout(identity.session_id)  # type: ignore[union-attr]
    return Response(status=204)


@bp.get("")
@require_user
@timing
def list_sessions():
    """List the sessions of the authenticated user, newest last."""

    identity = current_identity()
    views = get_session_service().list_sessions(identity.user_id)  # type: ignore[union-attr]
    return json_response({"data": sessions_schema.dump(views)})
