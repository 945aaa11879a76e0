"""SQLAlchemy ORM models for the customer read model.

Customers are projected from the membership stream. Rows are soft-deleted
so that the history behind them stays replayable.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin


class CustomerModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for the customers table.

    ``member`` is a cached projection of the live membership check and is
    never read back into the aggregate.
    """

    __tablename__ = "customers"

    woo_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    slack_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    capabilities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    cards: Mapped[list[CardModel]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CardModel.id",
    )

    def __repr__(self) -> str:
        return f"<CustomerModel(woo_id={self.woo_id}, email={self.email})>"


class CardModel(Base, TimestampMixin):
    """ORM model for the cards table.

    ``number`` is stored in canonical form (no leading zeros).
    """

    __tablename__ = "cards"
    __table_args__ = (
        UniqueConstraint("customer_id", "number", name="uq_cards_customer_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.woo_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    member_has_card: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    ever_activated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    customer: Mapped[CustomerModel] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<CardModel(number={self.number}, customer_id={self.customer_id})>"
