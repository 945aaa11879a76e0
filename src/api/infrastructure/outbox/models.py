"""SQLAlchemy ORM model for the reactor outbox."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from shared_kernel.outbox.value_objects import OutboxEntry


class OutboxModel(Base):
    """ORM model for the reactor_outbox table.

    One row per stored domain event, written in the same transaction. A row
    is pending until the reactor worker either marks it processed or, after
    too many failed attempts, dead-letters it by setting ``failed_at``.
    """

    __tablename__ = "reactor_outbox"
    __table_args__ = (
        Index(
            "ix_reactor_outbox_pending",
            "created_at",
            postgresql_where=text("processed_at IS NULL AND failed_at IS NULL"),
        ),
        Index(
            "ix_reactor_outbox_dead_letters",
            "failed_at",
            postgresql_where=text("failed_at IS NOT NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    aggregate_type: Mapped[str] = mapped_column(String(64), nullable=False)
    aggregate_id: Mapped[str] = mapped_column(String(64), nullable=False)
    event_type: Mapped[str] = mapped_column(String(255), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    retry_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default="0", default=0
    )
    last_error: Mapped[str | None] = mapped_column(Text)
    failed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def to_entry(self) -> OutboxEntry:
        return OutboxEntry(
            id=self.id,
            aggregate_type=self.aggregate_type,
            aggregate_id=self.aggregate_id,
            event_type=self.event_type,
            payload=self.payload,
            occurred_at=self.occurred_at,
            retry_count=self.retry_count or 0,
            last_error=self.last_error,
        )

    def __repr__(self) -> str:
        return (
            f"<OutboxModel(id={self.id}, "
            f"stream={self.aggregate_type}/{self.aggregate_id}, "
            f"event_type={self.event_type}, retry_count={self.retry_count})>"
        )
