from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Identity snapshot used for authentication.

    ``password_hash`` never leaves the service layer; it is not part of any
    token claim or HTTP payload.
    """

    id: int
    role: str
    password_hash: str
    email: str | None = None
    phone_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class UserDirectory(Protocol):
    """Lookup of users by login identifier or id."""

    def find_by_identifier(
        self, *, email: str | None = None, phone_number: str | None = None
    ) -> list[UserRecord]:
        """
        Return every user matching the identifier.

        Email takes precedence when both are given. Matches are ordered by
        id; the login flow tries them in that order.
        """

    def find_by_id(self, user_id: int) -> UserRecord | None:
        """Fetch a user by id."""


class InMemoryUserDirectory(UserDirectory):
    """Dictionary-backed directory for unit tests."""

    def __init__(self, users: list[UserRecord] | None = None) -> None:
        self._by_id: dict[int, UserRecord] = {}
        self._lock = threading.Lock()
        for user in users or []:
            self.add(user)

    def add(self, user: UserRecord) -> UserRecord:
        with self._lock:
            self._by_id[user.id] = user
            return user

    def find_by_identifier(
        self, *, email: str | None = None, phone_number: str | None = None
    ) -> list[UserRecord]:
        with self._lock:
            if email:
                key = email.strip().lower()
                return [u for u in self._by_id.values() if (u.email or "").lower() == key]
            if phone_number:
                key = phone_number.strip()
                return [u for u in self._by_id.values() if u.phone_number == key]
            return []

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with self._lock:
            return self._by_id.get(user_id)
