"""PostgreSQL implementation of ILegacyMemberRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from audit.domain.value_objects import LegacyMember
from audit.infrastructure.models import LegacyMemberModel
from audit.ports.repositories import ILegacyMemberRepository


class LegacyMemberRepository(ILegacyMemberRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[LegacyMember]:
        stmt = select(LegacyMemberModel).order_by(LegacyMemberModel.id)
        result = await self._session.execute(stmt)
        return [
            LegacyMember(
                id=model.id,
                first_name=model.first_name,
                last_name=model.last_name,
                email=model.email,
                active=model.active,
                card=model.card,
                slack_id=model.slack_id,
            )
            for model in result.scalars().all()
        ]
