"""DTOs for user registration and lookup."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserRegistrationIn:
    """
    Input payload for registration.

    :param email: Login email (normalized by the model).
    :param password: Raw password; hashed before it reaches the model.
    :param first_name: Public first name.
    :param last_name: Public last name.
    :param phone_number: Optional alternative login identifier.
    :param role: Role value, ``"user"`` unless an operator says otherwise.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str | None = None
    role: str = "user"


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public-safe user representation (no password hash)."""

    id: int
    email: str
    phone_number: str | None
    first_name: str
    last_name: str
    role: str
