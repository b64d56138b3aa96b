"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    Browser clients must be allowed to send the refresh-token header and to
    read the renewed access token from the response, so both custom header
    names are taken from config and registered with the policy.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. When ``CORS_ORIGINS`` is blank or ``"*"`` the policy allows
        any origin but disables credential support.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=[
            "Authorization",
            "Content-Type",
            app.config.get("REFRESH_TOKEN_HEADER", "X-Refresh"),
        ],
        expose_headers=[
            app.config.get("ACCESS_TOKEN_RESPONSE_HEADER", "X-Access-Token"),
            "X-Request-ID",
        ],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
