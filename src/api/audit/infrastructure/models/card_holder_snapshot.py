"""SQLAlchemy ORM model for access-card system exports."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class CardHolderSnapshotModel(Base):
    """ORM model for the card_holder_snapshots table.

    Each row is one complete listing of active cards as
    ``[{"card_num", "first_name", "last_name"}, ...]``. Only the most
    recent row is ever read.
    """

    __tablename__ = "card_holder_snapshots"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    card_holders: Mapped[list] = mapped_column(JSON, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<CardHolderSnapshotModel(id={self.id}, "
            f"card_holders={len(self.card_holders)})>"
        )
