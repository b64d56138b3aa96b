"""Per-request authentication.

Installed as a ``before_request`` hook. It reads the bearer access token and
an optional refresh token, verifies them through the session service's codec
and leaves the decoded claims in ``g.identity`` for downstream handlers.

Outcomes of verifying the access token:

- no token or ``INVALID``: the request continues anonymously;
- ``VALID``: the claims become the request identity;
- ``EXPIRED`` with a refresh token: one renewal attempt; on success the new
  access token is returned in a response header and becomes the identity;
- ``CONFIG_FAULT``: the request fails with a 500 problem response.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, Response, current_app, g, request

from sessiongate.core.errors import ServerFault, Unauthorized
from sessiongate.core.sessions import get_session_service
from sessiongate.services._shared.ports import TokenClaims, TokenType

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


def _bearer_token() -> str | None:
    raw = request.headers.get("Authorization", "")
    if raw[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    token = raw[len(BEARER_PREFIX) :].strip()
    return token or None


def _refresh_token() -> str | None:
    header = current_app.config.get("REFRESH_TOKEN_HEADER", "X-Refresh")
    token = (request.headers.get(header) or "").strip()
    return token or None


def _fail_closed() -> None:
    log.error("Token verification unavailable: signing key not configured")
    raise ServerFault()


def authenticate_request() -> None:
    """Populate ``g.identity`` from the request's tokens (single pass)."""
    # g outlives the request when a test client reuses an app context
    g.identity = None
    g.renewed_access_token = None

    token = _bearer_token()
    if token is None:
        return

    service = get_session_service()
    result = service.codec.verify(token)

    if result.is_config_fault:
        _fail_closed()

    if result.is_valid:
        if result.claims is not None and result.claims.token_type is TokenType.ACCESS:
            g.identity = result.claims
        return

    if not result.is_expired:
        return

    refresh = _refresh_token()
    if refresh is None:
        return

    fresh = service.renew_access_token(refresh)
    if fresh is None:
        return

    renewed = service.codec.verify(fresh)
    if renewed.is_config_fault:
        _fail_closed()
    if renewed.is_valid:
        g.identity = renewed.claims
        g.renewed_access_token = fresh


def expose_renewed_token(response: Response) -> Response:
    """Surface a renewed access token to the client."""
    fresh = g.get("renewed_access_token")
    if fresh:
        header = current_app.config.get("ACCESS_TOKEN_RESPONSE_HEADER", "X-Access-Token")
        response.headers[header] = fresh
    return response


def current_identity() -> TokenClaims | None:
    """Return the authenticated identity of the current request, if any."""
    return g.get("identity")


def require_user(func: F) -> F:
    """
    Reject the request with 401 unless it carries an identity whose user
    still exists in the directory.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        identity = current_identity()
        if identity is None:
            raise Unauthorized("Authentication required")
        if get_session_service().users.find_by_id(identity.user_id) is None:
            log.info("Identity references a missing user", extra={"user_id": identity.user_id})
            raise Unauthorized("Authentication required")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def init_app(app: Flask) -> None:
    """Install the authenticator hooks on ``app``."""
    app.before_request(authenticate_request)
    app.after_request(expose_renewed_token)


__all__ = [
    "authenticate_request",
    "current_identity",
    "init_app",
    "require_user",
]
