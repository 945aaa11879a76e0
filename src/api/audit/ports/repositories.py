"""Repository protocols (ports) for the audit bounded context."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from audit.domain.value_objects import CardHolder, LegacyMember


@runtime_checkable
class ILegacyMemberRepository(Protocol):
    """Members tracked by hand before the e-commerce platform existed."""

    async def list_all(self) -> list[LegacyMember]:
        ...


@runtime_checkable
class ICardHolderSnapshotRepository(Protocol):
    """Active-card listings exported from the access-card system."""

    async def latest(self) -> list[CardHolder] | None:
        """Return the most recent snapshot, or None if none was recorded."""
        ...

    async def record(self, card_holders: Sequence[CardHolder]) -> None:
        """Add a snapshot. The caller owns the transaction."""
        ...
