"""SQLAlchemy ORM model for the waivers table."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class WaiverModel(Base, TimestampMixin):
    """ORM model for waivers.

    Links to customers are not stored here: they live in the membership
    stream as WaiverAssignedToCustomer events.
    """

    __tablename__ = "waivers"

    waiver_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    template_id: Mapped[str] = mapped_column(String(64), nullable=False)
    template_version: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<WaiverModel(waiver_id={self.waiver_id}, status={self.status})>"
