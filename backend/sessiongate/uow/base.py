"""
Transactional boundary contract shared by the SQLAlchemy units of work.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sessiongate.repositories import SessionRepository, UserRepository


class UnitOfWork(ABC):
    """
    Scope in which the user and session repositories share one database session.

    ``users`` and ``sessions`` are bound to that session for the lifetime of
    the context. Read-write implementations commit on a clean exit and roll
    back otherwise; read-only ones never commit.
    """

    users: UserRepository
    sessions: SessionRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
