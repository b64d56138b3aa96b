# sessiongate/infra/sqlalchemy/sql_user_directory.py
from __future__ import annotations

from dataclasses import dataclass

from sessiongate.models.user import User
from sessiongate.services._shared.ports import UserDirectory, UserRecord
from sessiongate.uow import SQLAlchemyReadOnlyUnitOfWork


def to_record(user: User) -> UserRecord:
    """Snapshot an ORM user into a :class:`UserRecord`."""
    return UserRecord(
        id=user.id,
        role=user.role.value,
        password_hash=user.password_hash,
        email=user.email,
        phone_number=user.phone_number,
        first_name=user.first_name,
        last_name=user.last_name,
    )


@dataclass(slots=True)
class SQLAlchemyUserDirectory(UserDirectory):
    """Read-only user directory over the ``users`` table."""

    def find_by_identifier(
        self, *, email: str | None = None, phone_number: str | None = None
    ) -> list[UserRecord]:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            if email:
                rows = uow.users.find_by_email(email)
            elif phone_number:
                rows = uow.users.find_by_phone(phone_number)
            else:
                rows = []
            return [to_record(u) for u in rows]

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            user = uow.users.get(user_id)
            return to_record(user) if user is not None else None
