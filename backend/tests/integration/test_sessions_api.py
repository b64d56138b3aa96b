"""End-to-end session lifecycle through the HTTP API."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from tests.helpers.utils import json_headers, tamper

USERS_URL = "/api/v1/users"
SESSIONS_URL = "/api/v1/sessions"
CURRENT_URL = "/api/v1/sessions/current"

PASSWORD = "correct-horse"


@pytest.fixture
def registered(client):
    """Register a user through the API and return its public payload."""
    resp = client.post(
        USERS_URL,
        json={
            "email": "ada@example.com",
            "phone_number": "+34 600 111 222",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "password": PASSWORD,
        },
    )
    assert resp.status_code == 201
    return resp.get_json()["data"]


def login(client, *, user_agent: str | None = None, **body):
    body.setdefault("password", PASSWORD)
    return client.post(SESSIONS_URL, json=body, headers=json_headers(user_agent=user_agent))


# --------------------------------------------------------------------------- #
# Login
# --------------------------------------------------------------------------- #


def test_login_with_email(client, registered):
    resp = login(client, email="ada@example.com")

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["token_type"] == "bearer"
    assert data["access_token"] and data["refresh_token"]
    assert data["access_token"] != data["refresh_token"]
    assert isinstance(data["session_id"], int)


def test_login_with_phone_number(client, registered):
    resp = login(client, phone_number="+34600111222")
    assert resp.status_code == 201


def test_login_records_user_agent(client, registered, session_service):
    resp = login(client, email="ada@example.com", user_agent="pytest-agent/1.0")
    session_id = resp.get_json()["data"]["session_id"]

    (view,) = session_service.list_sessions(registered["id"])
    assert view.id == session_id
    assert view.user_client == "pytest-agent/1.0"


def test_wrong_password_is_401_problem(client, registered):
    resp = login(client, email="ada@example.com", password="nope")

    assert resp.status_code == 401
    assert resp.mimetype == "application/problem+json"
    problem = resp.get_json()
    assert problem["code"] == "unauthorized"
    assert problem["detail"] == "Invalid login"


def test_unknown_user_looks_like_wrong_password(client, registered):
    unknown = login(client, email="ghost@example.com").get_json()
    wrong = login(client, email="ada@example.com", password="nope").get_json()
    assert unknown["detail"] == wrong["detail"]


def test_login_without_identifier_is_422(client):
    resp = client.post(SESSIONS_URL, json={"password": PASSWORD})
    assert resp.status_code == 422
    assert resp.get_json()["code"] == "validation_error"


def test_login_without_signing_key_is_500(app, client, registered, session_service):
    app.config["JWT_SECRET_KEY"] = None

    resp = login(client, email="ada@example.com")

    assert resp.status_code == 500
    assert resp.get_json()["code"] == "internal_server_error"
    assert "access_token" not in resp.get_data(as_text=True)


def test_environment_key_overrides_config(monkeypatch, app, client, registered):
    app.config["JWT_SECRET_KEY"] = None
    monkeypatch.setenv("JWT_SECRET_KEY", "env-secret-0123456789abcdef-0123456789abcdef-0123456789abcd")

    assert login(client, email="ada@example.com").status_code == 201


# --------------------------------------------------------------------------- #
# Authenticated requests
# --------------------------------------------------------------------------- #


def test_whoami_with_valid_access_token(client, registered):
    tokens = login(client, email="ada@example.com").get_json()["data"]

    resp = client.get(CURRENT_URL, headers=json_headers(tokens["access_token"]))

    assert resp.status_code == 200
    identity = resp.get_json()["data"]
    assert identity["user_id"] == registered["id"]
    assert identity["session_id"] == tokens["session_id"]
    assert identity["email"] == "ada@example.com"
    assert identity["role"] == "user"
    assert "password_hash" not in identity
    assert "X-Access-Token" not in resp.headers


def test_whoami_anonymous_is_401(client):
    resp = client.get(CURRENT_URL)
    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Authentication required"


@pytest.mark.parametrize("header", ["Bearer garbage", "Basic abc", "Bearer "])
def test_unusable_authorization_is_anonymous(client, header):
    resp = client.get(CURRENT_URL, headers={"Authorization": header})
    assert resp.status_code == 401


def test_tampered_token_is_anonymous(client, registered):
    tokens = login(client, email="ada@example.com").get_json()["data"]
    resp = client.get(CURRENT_URL, headers=json_headers(tamper(tokens["access_token"])))
    assert resp.status_code == 401


def test_refresh_token_is_not_accepted_as_bearer(client, registered):
    tokens = login(client, email="ada@example.com").get_json()["data"]
    resp = client.get(CURRENT_URL, headers=json_headers(tokens["refresh_token"]))
    assert resp.status_code == 401


def test_missing_key_on_authenticated_request_is_500(app, client, registered):
    tokens = login(client, email="ada@example.com").get_json()["data"]
    app.config["JWT_SECRET_KEY"] = None

    resp = client.get(CURRENT_URL, headers=json_headers(tokens["access_token"]))
    assert resp.status_code == 500


def test_missing_key_does_not_affect_anonymous_requests(app, client):
    app.config["JWT_SECRET_KEY"] = None
    assert client.get("/api/v1/health").status_code == 200


# --------------------------------------------------------------------------- #
# Transparent renewal
# --------------------------------------------------------------------------- #


def test_expired_access_token_is_renewed_with_refresh_token(client, registered):
    with freeze_time("2026-03-01 08:00:00") as frozen:
        tokens = login(client, email="ada@example.com").get_json()["data"]
        frozen.tick(timedelta(hours=2))

        resp = client.get(
            CURRENT_URL, headers=json_headers(tokens["access_token"], tokens["refresh_token"])
        )

        assert resp.status_code == 200
        fresh = resp.headers["X-Access-Token"]
        assert fresh and fresh != tokens["access_token"]
        assert resp.get_json()["data"]["session_id"] == tokens["session_id"]

        # the renewed token works on its own
        again = client.get(CURRENT_URL, headers=json_headers(fresh))
        assert again.status_code == 200
        assert "X-Access-Token" not in again.headers


def test_expired_access_token_without_refresh_is_401(client, registered):
    with freeze_time("2026-03-01 08:00:00") as frozen:
        tokens = login(client, email="ada@example.com").get_json()["data"]
        frozen.tick(timedelta(hours=2))

        resp = client.get(CURRENT_URL, headers=json_headers(tokens["access_token"]))
        assert resp.status_code == 401
        assert "X-Access-Token" not in resp.headers


def test_expired_refresh_token_forces_new_login(client, registered):
    with freeze_time("2026-03-01 08:00:00") as frozen:
        tokens = login(client, email="ada@example.com").get_json()["data"]
        frozen.tick(timedelta(days=8))

        resp = client.get(
            CURRENT_URL, headers=json_headers(tokens["access_token"], tokens["refresh_token"])
        )
        assert resp.status_code == 401


def test_valid_access_token_ignores_refresh_header(client, registered):
    tokens = login(client, email="ada@example.com").get_json()["data"]
    resp = client.get(
        CURRENT_URL, headers=json_headers(tokens["access_token"], tokens["refresh_token"])
    )
    assert resp.status_code == 200
    assert "X-Access-Token" not in resp.headers


# --------------------------------------------------------------------------- #
# Logout
# --------------------------------------------------------------------------- #


def test_logout_blocks_renewal(client, registered):
    with freeze_time("2026-03-01 08:00:00") as frozen:
        tokens = login(client, email="ada@example.com").get_json()["data"]

        resp = client.delete(CURRENT_URL, headers=json_headers(tokens["access_token"]))
        assert resp.status_code == 204

        frozen.tick(timedelta(hours=2))
        resp = client.get(
            CURRENT_URL, headers=json_headers(tokens["access_token"], tokens["refresh_token"])
        )
        assert resp.status_code == 401


def test_logout_leaves_other_sessions_alone(client, registered):
    with freeze_time("2026-03-01 08:00:00") as frozen:
        first = login(client, email="ada@example.com").get_json()["data"]
        second = login(client, email="ada@example.com").get_json()["data"]

        client.delete(CURRENT_URL, headers=json_headers(first["access_token"]))
        frozen.tick(timedelta(hours=2))

        resp = client.get(
            CURRENT_URL, headers=json_headers(second["access_token"], second["refresh_token"])
        )
        assert resp.status_code == 200
        assert resp.headers["X-Access-Token"]


def test_logout_requires_authentication(client):
    assert client.delete(CURRENT_URL).status_code == 401


def test_list_own_sessions(client, registered):
    first = login(client, email="ada@example.com").get_json()["data"]
    second = login(client, email="ada@example.com").get_json()["data"]
    client.delete(CURRENT_URL, headers=json_headers(first["access_token"]))

    resp = client.get(SESSIONS_URL, headers=json_headers(second["access_token"]))

    assert resp.status_code == 200
    listed = [(s["id"], s["is_valid"]) for s in resp.get_json()["data"]]
    assert listed == [(first["session_id"], False), (second["session_id"], True)]
