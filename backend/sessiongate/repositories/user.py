"""User repository for identity lookups."""

from __future__ import annotations

from sqlalchemy import select

from sessiongate.models.user import User, normalize_email, normalize_phone
from sessiongate.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles tokens or sessions, only DB-level user lookups.
    """

    model = User

    def find_by_email(self, email: str) -> list[User]:
        """Return users whose email matches (case-insensitive).

        A list is returned so callers do not depend on the uniqueness
        constraint being present in every deployment.
        """
        stmt = select(User).where(User.email == normalize_email(email)).order_by(User.id)
        return list(self.session.execute(stmt).scalars().all())

    def find_by_phone(self, phone_number: str) -> list[User]:
        """Return users whose normalized phone number matches."""
        stmt = (
            select(User)
            .where(User.phone_number == normalize_phone(phone_number))
            .order_by(User.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == normalize_email(email))
        return bool(self.session.execute(stmt).first())

    def exists_by_phone(self, phone_number: str) -> bool:
        """Return ``True`` when a user with the provided phone number exists."""
        stmt = select(User.id).where(User.phone_number == normalize_phone(phone_number))
        return bool(self.session.execute(stmt).first())
