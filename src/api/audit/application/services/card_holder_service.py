"""Records the active-card listings exported by the access-card system."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from audit.application.observability import DefaultIssueAuditProbe, IssueAuditProbe
from audit.domain.value_objects import CardHolder
from audit.ports.repositories import ICardHolderSnapshotRepository


class CardHolderService:
    def __init__(
        self,
        session: AsyncSession,
        repository: ICardHolderSnapshotRepository,
        probe: IssueAuditProbe | None = None,
    ):
        self._session = session
        self._repository = repository
        self._probe = probe or DefaultIssueAuditProbe()

    async def record_snapshot(self, card_holders: Sequence[CardHolder]) -> int:
        """Store a new snapshot; the next audit checks cards against it."""
        async with self._session.begin():
            await self._repository.record(card_holders)

        self._probe.card_holder_snapshot_recorded(len(card_holders))
        return len(card_holders)
