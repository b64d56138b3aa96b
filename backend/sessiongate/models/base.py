"""Column mixins shared by ``User`` and ``Session``."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """``created_at``/``updated_at`` in UTC.

    Values are set client-side so a freshly flushed row can be snapshotted
    without a refresh; the server default covers rows inserted by migrations
    or by hand. ``updated_at`` moves whenever the row is updated, which for
    sessions means on invalidation.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )


class PKMixin:
    """Integer surrogate key ``id``; session ids double as the ``sid`` claim."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class ReprMixin:
    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
