"""
UserService
===========

Registration and lookup of identities consulted by the session core.

- Passwords are hashed with :class:`CredentialHasher` before persisting.
- Duplicate email or phone number yields :class:`ConflictError`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from sessiongate.models.user import Role, User
from sessiongate.services._shared.base import BaseService
from sessiongate.services._shared.errors import ConflictError, NotFoundError
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.users.dto import UserPublicOut, UserRegistrationIn

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Orchestrates user registration and read access."""

    def __init__(self, *, hasher: CredentialHasher) -> None:
        self.hasher = hasher

    def register(self, dto: UserRegistrationIn) -> UserPublicOut:
        """
        Create a user.

        :raises ConflictError: When the email or phone number is taken.
        """
        with self.rw_uow() as uow:
            if uow.users.exists_by_email(dto.email):
                raise ConflictError("User", "email")
            if dto.phone_number and uow.users.exists_by_phone(dto.phone_number):
                raise ConflictError("User", "phone_number")

            user = User(
                email=dto.email,
                phone_number=dto.phone_number,
                first_name=dto.first_name,
                last_name=dto.last_name,
                role=Role(dto.role),
                password_hash=self.hasher.hash(dto.password),
            )
            try:
                uow.users.add(user)
            except IntegrityError as exc:
                # Lost a race against a concurrent registration
                raise ConflictError("User", "email") from exc
            out = self._to_public(user)

        log.info("User registered", extra={"user_id": out.id})
        return out

    def get(self, user_id: int) -> UserPublicOut:
        """
        Fetch one user.

        :raises NotFoundError: If the id is unknown.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_public(user)

    @staticmethod
    def _to_public(user: User) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            email=user.email,
            phone_number=user.phone_number,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
        )
