"""SQLAlchemy ORM model for manually tracked legacy members."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class LegacyMemberModel(Base, TimestampMixin):
    """ORM model for the legacy_members table.

    Maintained by hand; the auditor only reads it.
    """

    __tablename__ = "legacy_members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    card: Mapped[str | None] = mapped_column(String(32), nullable=True)
    slack_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<LegacyMemberModel(id={self.id}, active={self.active})>"
