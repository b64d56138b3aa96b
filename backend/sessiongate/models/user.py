"""User model: the identity directory consulted by the session core."""

from __future__ import annotations

import enum
import re

from sqlalchemy import Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from sessiongate.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

_PHONE_NOISE = re.compile(r"[\s().-]")


class Role(str, enum.Enum):
    """Authorization role carried into token claims."""

    USER = "user"
    ADMIN = "admin"


def normalize_email(value: str) -> str:
    """Lowercase and trim an email address."""
    return value.strip().lower()


def normalize_phone(value: str) -> str:
    """Strip separators from a phone number, keeping a leading ``+``."""
    return _PHONE_NOISE.sub("", value.strip())


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    phone_number : str | None
        Optional alternative login identifier, stored without separators.
    first_name, last_name : str
        Public profile fields, title-cased.
    role : Role
        Authorization role.
    password_hash : str
        Salted hash produced by :class:`~sessiongate.services.credentials.CredentialHasher`.
        Never exposed through schemas or token claims.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    first_name: Mapped[str] = mapped_column(String(30), nullable=False)
    last_name: Mapped[str] = mapped_column(String(30), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USER,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # the ORM never rewrites or deletes session rows when a user goes away
    sessions = relationship(
        "Session", back_populates="user", lazy="select", passive_deletes="all"
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("phone_number", name="uq_users_phone_number"),
        Index("ix_users_email", "email"),
        Index("ix_users_phone_number", "phone_number"),
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("phone_number")
    def _normalize_phone(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        v = normalize_phone(value)
        return v or None

    @validates("first_name", "last_name")
    def _title_case(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} is required.")
        return value.strip().title()
