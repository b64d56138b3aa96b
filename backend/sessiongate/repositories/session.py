"""Session repository: the only writer of ``sessions`` rows."""

from __future__ import annotations

from sessiongate.models.session import Session
from sessiongate.repositories.base import BaseRepository


class SessionRepository(BaseRepository[Session]):
    """Persistence-only repository for :class:`Session`."""

    model = Session

    def create(self, *, user_id: int, user_client: str | None) -> Session:
        """Insert a new valid session and return it with its generated id."""
        return self.add(Session(user_id=user_id, user_client=user_client, is_valid=True))

    def invalidate(self, session_id: int) -> bool:
        """Mark a session invalid.

        :returns: ``True`` if the session exists (already invalid included).
        """
        row = self.get(session_id)
        if row is None:
            return False
        if row.is_valid:
            row.is_valid = False
            self.flush()
        return True

    def list_for_user(self, user_id: int) -> list[Session]:
        """Return every session of ``user_id`` ordered by id."""
        return self.list_by(user_id=user_id)
