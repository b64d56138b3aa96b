from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class SessionView:
    """
    Read-model for a login session.

    :ivar id: Session identifier embedded in tokens as ``sid``.
    :ivar user_id: Owner user id.
    :ivar user_client: Client label captured at login (e.g. user agent).
    :ivar is_valid: ``False`` once the session has been invalidated.
    :ivar created_at: Creation time (UTC).
    :ivar updated_at: Last state change (UTC).
    """

    id: int
    user_id: int
    user_client: str | None
    is_valid: bool
    created_at: datetime
    updated_at: datetime


class SessionStore(Protocol):
    """
    Durable record of login sessions.

    Implementations MUST make ``create`` a single atomic write and MUST make
    ``invalidate`` visible to the very next ``get`` for the same id.
    Sessions are never deleted through this port.
    """

    def create(self, *, user_id: int, user_client: str | None = None) -> SessionView:
        """Insert a new, valid session. Several sessions per user are allowed."""

    def get(self, session_id: int) -> SessionView | None:
        """Fetch a session snapshot, or ``None`` when unknown."""

    def invalidate(self, session_id: int) -> bool:
        """Mark a session invalid. :returns: True if it exists."""

    def list_for_user(self, user_id: int) -> list[SessionView]:
        """List every session (valid or not) owned by ``user_id``."""


class InMemorySessionStore(SessionStore):
    """
    Process-local session store.

    .. note::
       Uses a threading lock so concurrent requests in tests observe atomic
       writes and immediate invalidation.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, SessionView] = {}
        self._seq = 0
        self._lock = threading.Lock()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    def create(self, *, user_id: int, user_client: str | None = None) -> SessionView:
        with self._lock:
            self._seq += 1
            now = self._now()
            view = SessionView(
                id=self._seq,
                user_id=user_id,
                user_client=user_client,
                is_valid=True,
                created_at=now,
                updated_at=now,
            )
            self._by_id[view.id] = view
            return view

    def get(self, session_id: int) -> SessionView | None:
        with self._lock:
            return self._by_id.get(session_id)

    def invalidate(self, session_id: int) -> bool:
        with self._lock:
            view = self._by_id.get(session_id)
            if view is None:
                return False
            if view.is_valid:
                self._by_id[session_id] = replace(view, is_valid=False, updated_at=self._now())
            return True

    def list_for_user(self, user_id: int) -> list[SessionView]:
        with self._lock:
            return [v for _, v in sorted(self._by_id.items()) if v.user_id == user_id]
