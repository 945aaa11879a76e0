"""PostgreSQL implementation of ICardHolderSnapshotRepository."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from audit.domain.value_objects import CardHolder
from audit.infrastructure.models import CardHolderSnapshotModel
from audit.ports.repositories import ICardHolderSnapshotRepository


class CardHolderSnapshotRepository(ICardHolderSnapshotRepository):
    """Stores card-holder listings as JSON rows; newest wins."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def latest(self) -> list[CardHolder] | None:
        stmt = (
            select(CardHolderSnapshotModel)
            .order_by(CardHolderSnapshotModel.recorded_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        return [
            CardHolder(
                card_num=str(entry["card_num"]),
                first_name=entry.get("first_name", ""),
                last_name=entry.get("last_name", ""),
            )
            for entry in model.card_holders
        ]

    async def record(self, card_holders: Sequence[CardHolder]) -> None:
        self._session.add(
            CardHolderSnapshotModel(
                id=str(ULID()),
                card_holders=[
                    {
                        "card_num": holder.card_num,
                        "first_name": holder.first_name,
                        "last_name": holder.last_name,
                    }
                    for holder in card_holders
                ],
            )
        )
        await self._session.flush()
