"""Generic repository base for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; the Unit of Work owns transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from sessiongate.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``sessiongate.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ CRUD -------------------------------------

    def get(self, pk: Any) -> E | None:
        """Fetch an entity by primary key.

        :param pk: Primary-key value.
        :returns: Entity or ``None`` when absent.
        """
        return cast(E | None, self.session.get(self.model, pk))

    def add(self, instance: E) -> E:
        """Stage a new entity and flush so generated keys are populated.

        :param instance: Transient entity.
        :returns: The same instance, now pending with an identity.
        """
        self.session.add(instance)
        self.session.flush()
        return instance

    def list_by(self, **filters: Any) -> list[E]:
        """Return entities matching equality ``filters`` ordered by primary key."""
        stmt = select(self.model)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        pk = getattr(self.model, "id", None)
        if pk is not None:
            stmt = stmt.order_by(pk.asc())
        return list(self.session.execute(stmt).scalars().all())

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.session.flush()
