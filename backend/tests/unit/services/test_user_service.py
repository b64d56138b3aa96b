"""Tests for UserService registration and lookup."""

from __future__ import annotations

import pytest
from sessiongate.models import Role, User
from sessiongate.services._shared.errors import ConflictError, NotFoundError
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.users import UserRegistrationIn, UserService

from tests.factories.user import UserFactory


@pytest.fixture
def service(app):
    return UserService(hasher=CredentialHasher("pbkdf2:sha256:1000"))


def _dto(**kw) -> UserRegistrationIn:
    data = {
        "email": "Grace@Example.com",
        "password": "s3cret-pass",
        "first_name": "grace",
        "last_name": "hopper",
        "phone_number": "+1 (555) 010-0000",
    }
    data.update(kw)
    return UserRegistrationIn(**data)


def test_register_hashes_password_and_normalises_fields(service, session):
    out = service.register(_dto())

    assert out.email == "grace@example.com"
    assert out.phone_number == "+15550100000"
    assert (out.first_name, out.last_name) == ("Grace", "Hopper")
    assert out.role == "user"

    row = session.get(User, out.id)
    assert row.password_hash != "s3cret-pass"
    assert CredentialHasher().verify("s3cret-pass", row.password_hash)


def test_register_admin_role(service):
    assert service.register(_dto(role="admin")).role == Role.ADMIN.value


@pytest.mark.usefixtures("factories_session")
def test_register_duplicate_email(service):
    UserFactory(email="grace@example.com")
    with pytest.raises(ConflictError) as exc:
        service.register(_dto(phone_number=None))
    assert str(exc.value) == "email already taken"


@pytest.mark.usefixtures("factories_session")
def test_register_duplicate_phone(service):
    UserFactory(phone_number="+15550100000")
    with pytest.raises(ConflictError) as exc:
        service.register(_dto(email="other@example.com"))
    assert str(exc.value) == "phone_number already taken"


def test_get_returns_public_view(service):
    created = service.register(_dto())
    fetched = service.get(created.id)
    assert fetched == created
    assert not hasattr(fetched, "password_hash")


def test_get_unknown_raises(service):
    with pytest.raises(NotFoundError):
        service.get(404)


def test_translate_exceptions_maps_to_api_errors(service):
    from sessiongate.core.errors import Conflict, NotFound

    assert isinstance(service.translate_exceptions(NotFoundError("User", 1)), NotFound)
    assert isinstance(service.translate_exceptions(ConflictError("User", "email")), Conflict)
