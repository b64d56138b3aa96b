"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app bound to an in-memory SQLite database (a single
shared connection via Flask-SQLAlchemy's ``StaticPool``). Tables are created
before and dropped after the test, so services can commit for real.
"""

from __future__ import annotations

import pytest
from sessiongate.core.config import JWT_SECRET_ENV, TestingConfig
from sessiongate.core.extensions import db as _db
from sessiongate.factory import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef-0123456789abcdef-0123456789"


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database and the SQL session store.
    - Never reaches Redis; the Redis store is tested against fakeredis.
    - Pins a signing secret so tokens are reproducible across cases.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = TEST_SECRET
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_TTL = 3600
    REFRESH_TOKEN_TTL = 7 * 24 * 3600
    SESSION_STORE = "sql"
    REDIS_URL = None
    LOG_LEVEL = "WARNING"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep the developer's environment out of the key loader and config."""
    monkeypatch.delenv(JWT_SECRET_ENV, raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


@pytest.fixture
def app():
    """Create an application with its schema and a pushed app context.

    Yields
    ------
    flask.Flask
        Application instance configured with :class:`TestConfig`.
    """
    application = create_app(TestConfig, instance_relative_config=False)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def session(app):
    """Return the Flask-scoped SQLAlchemy session of the test app."""
    return _db.session


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Return a Flask CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def session_service(app):
    """Return the session service wired into the test app."""
    from sessiongate.core.sessions import get_session_service

    return get_session_service()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the app session ------------------------------------
@pytest.fixture
def factories_session(session):
    """Wire Factory Boy's session helper to the test app's session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield session
    SQLAlchemySession.set(None)
