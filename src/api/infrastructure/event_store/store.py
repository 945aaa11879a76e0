"""Event store implementation on top of the shared async session.

Like the outbox repository, the store only adds rows and executes queries;
the calling service owns the transaction boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from infrastructure.event_store.models import StoredEventModel
from shared_kernel.event_store.exceptions import ConcurrencyError

if TYPE_CHECKING:
    from shared_kernel.outbox.ports import EventSerializer


class SqlAlchemyEventStore:
    """Append-only event log with optimistic concurrency per stream.

    Events cross this boundary as typed domain events. They are encoded
    with the injected serializer on append and decoded exactly once on
    replay.
    """

    def __init__(self, session: AsyncSession, serializer: "EventSerializer") -> None:
        self._session = session
        self._serializer = serializer

    async def _current_version(self, aggregate_type: str, aggregate_id: str) -> int:
        stmt = select(func.coalesce(func.max(StoredEventModel.version), 0)).where(
            StoredEventModel.aggregate_type == aggregate_type,
            StoredEventModel.aggregate_id == aggregate_id,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def append(
        self,
        aggregate_type: str,
        aggregate_id: str,
        events: Sequence[Any],
        expected_version: int,
    ) -> int:
        """Append events after ``expected_version``.

        Raises:
            ConcurrencyError: If another writer appended to the stream first
        """
        if not events:
            return expected_version

        actual_version = await self._current_version(aggregate_type, aggregate_id)
        if actual_version != expected_version:
            raise ConcurrencyError(
                aggregate_type, aggregate_id, expected_version, actual_version
            )

        version = expected_version
        for event in events:
            version += 1
            self._session.add(
                StoredEventModel(
                    id=str(ULID()),
                    aggregate_type=aggregate_type,
                    aggregate_id=aggregate_id,
                    version=version,
                    event_type=type(event).__name__,
                    payload=self._serializer.serialize(event),
                    occurred_at=event.occurred_at,
                )
            )

        try:
            await self._session.flush()
        except IntegrityError as e:
            # The transaction is unusable after a failed flush.
            raise ConcurrencyError(
                aggregate_type, aggregate_id, expected_version, None
            ) from e

        return version

    async def replay(self, aggregate_type: str, aggregate_id: str) -> list[Any]:
        stmt = (
            select(StoredEventModel)
            .where(StoredEventModel.aggregate_type == aggregate_type)
            .where(StoredEventModel.aggregate_id == aggregate_id)
            .order_by(StoredEventModel.version)
        )
        result = await self._session.execute(stmt)
        return [
            self._serializer.deserialize(model.event_type, model.payload)
            for model in result.scalars().all()
        ]
