"""SQLAlchemy ORM model for the append-only event log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class StoredEventModel(Base):
    """ORM model for the stored_events table.

    One row per domain event. ``version`` is the 1-based position of the
    event in its stream; the unique constraint turns a concurrent append
    at the same position into an integrity error.
    """

    __tablename__ = "stored_events"
    __table_args__ = (
        UniqueConstraint(
            "aggregate_type",
            "aggregate_id",
            "version",
            name="uq_stored_events_stream_version",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    aggregate_type: Mapped[str] = mapped_column(String(64), nullable=False)
    aggregate_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    event_type: Mapped[str] = mapped_column(String(255), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    )

    def __repr__(self) -> str:
        return (
            f"<StoredEventModel("
            f"stream={self.aggregate_type}/{self.aggregate_id}, "
            f"version={self.version}, "
            f"event_type={self.event_type}"
            f")>"
        )
