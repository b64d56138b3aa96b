"""Login session model anchoring trust for a family of tokens."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sessiongate.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Session(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One row per successful login.

    Fields
    ------
    user_id : int
        Owning user.
    user_client : str | None
        Free-form client label (typically the ``User-Agent`` header).
    is_valid : bool
        ``True`` until the session is explicitly invalidated. Tokens bound to
        an invalid session are never renewed.

    Rows are never deleted by the application and may outlive their user;
    retention is an operator concern.
    """

    __tablename__ = "sessions"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    user_client: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_valid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="sessions")

    __table_args__ = (Index("ix_sessions_user_id", "user_id"),)
