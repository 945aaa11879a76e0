"""Outbox repository implementation.

PostgreSQL implementation of the outbox repository. Domain events are
appended in the same transaction as the stored events they mirror, and
claimed, completed or failed by the reactor worker.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.value_objects import OutboxEntry

if TYPE_CHECKING:
    from shared_kernel.outbox.ports import EventSerializer


class OutboxRepository:
    """PostgreSQL implementation of the outbox repository.

    This repository shares the same database session as the calling service,
    so an event is either both stored and queued for reactors, or neither.

    The repository only calls session.add() and session.execute() - it never
    calls session.commit(). The calling service owns the transaction boundary.
    """

    def __init__(
        self,
        session: AsyncSession,
        serializer: "EventSerializer | None" = None,
    ) -> None:
        """Initialize the repository with a session and serializer.

        Args:
            session: The SQLAlchemy async session (shared with calling service)
            serializer: Event serializer; only needed for append()
        """
        self._session = session
        self._serializer = serializer

    async def append(self, event: Any, aggregate_type: str, aggregate_id: str) -> None:
        """Append an event to the outbox within the current transaction.

        Args:
            event: The domain event to append
            aggregate_type: Type of aggregate (e.g., "membership")
            aggregate_id: Identifier of the aggregate stream

        Raises:
            RuntimeError: If the repository was built without a serializer
        """
        if self._serializer is None:
            raise RuntimeError("OutboxRepository.append requires a serializer")

        self._session.add(
            OutboxModel(
                id=str(ULID()),
                aggregate_type=aggregate_type,
                aggregate_id=aggregate_id,
                event_type=type(event).__name__,
                payload=self._serializer.serialize(event),
                occurred_at=event.occurred_at,
            )
        )

    async def fetch_unprocessed(self, limit: int = 100) -> list[OutboxEntry]:
        """Claim unprocessed, non dead-lettered entries in creation order.

        Uses FOR UPDATE SKIP LOCKED so concurrent workers never claim the
        same entry; the lock lasts until the caller's transaction ends.
        """
        stmt = (
            select(OutboxModel)
            .where(OutboxModel.processed_at.is_(None))
            .where(OutboxModel.failed_at.is_(None))
            .order_by(OutboxModel.created_at)
            .limit(limit)
            .with_for_update(skip_locked=True)
        )

        result = await self._session.execute(stmt)
        return [model.to_entry() for model in result.scalars().all()]

    async def mark_processed(self, entry_id: str) -> None:
        """Set processed_at to the current UTC time."""
        stmt = (
            update(OutboxModel)
            .where(OutboxModel.id == entry_id)
            .values(processed_at=datetime.now(UTC))
        )
        await self._session.execute(stmt)

    async def record_failure(
        self,
        entry_id: str,
        retry_count: int,
        error: str,
        dead_letter: bool,
    ) -> None:
        """Record a failed attempt, optionally moving the entry to the DLQ.

        A dead-lettered entry has failed_at set and is no longer claimed.
        """
        values: dict[str, Any] = {"retry_count": retry_count, "last_error": error}
        if dead_letter:
            values["failed_at"] = datetime.now(UTC)

        stmt = update(OutboxModel).where(OutboxModel.id == entry_id).values(**values)
        await self._session.execute(stmt)
