# sessiongate/infra/sqlalchemy/sql_session_store.py
from __future__ import annotations

from dataclasses import dataclass

from sessiongate.models.session import Session
from sessiongate.services._shared.ports import SessionStore, SessionView
from sessiongate.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def to_view(row: Session) -> SessionView:
    """Detach an ORM row into an immutable :class:`SessionView`."""
    return SessionView(
        id=row.id,
        user_id=row.user_id,
        user_client=row.user_client,
        is_valid=bool(row.is_valid),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


@dataclass(slots=True)
class SQLAlchemySessionStore(SessionStore):
    """
    Database-backed session store.

    Every write runs in its own read-write unit of work and commits before
    returning, so an invalidation is visible to the next ``get`` from any
    request.

    .. note::
       Requires an active Flask app context (Flask-SQLAlchemy scoped session).
    """

    def create(self, *, user_id: int, user_client: str | None = None) -> SessionView:
        with SQLAlchemyUnitOfWork() as uow:
            row = uow.sessions.create(user_id=user_id, user_client=user_client)
            return to_view(row)

    def get(self, session_id: int) -> SessionView | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.sessions.get(session_id)
            return to_view(row) if row is not None else None

    def invalidate(self, session_id: int) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.sessions.invalidate(session_id)

    def list_for_user(self, user_id: int) -> list[SessionView]:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            return [to_view(row) for row in uow.sessions.list_for_user(user_id)]
