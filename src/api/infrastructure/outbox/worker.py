"""Reactor worker turning outbox entries into side-effecting actions.

The worker runs as a background task within the FastAPI application and
polls the outbox table. Delivery is at-least-once: an entry whose actions
fail is retried as a whole on a later poll, so every action must be
idempotent.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.outbox.repository import OutboxRepository
from shared_kernel.outbox.ports import ActionExecutor, EventReactor, EventSerializer
from shared_kernel.outbox.value_objects import OutboxEntry

if TYPE_CHECKING:
    from shared_kernel.outbox.observability import OutboxWorkerProbe


class ReactorWorker:
    """Background worker that reacts to outbox entries.

    For every claimed entry the worker decodes the event once, asks the
    reactor for the follow-up actions and hands each action to the
    executor. The worker itself is bounded-context agnostic: serializer,
    reactor and executor are injected.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        serializer: EventSerializer,
        reactor: EventReactor,
        executor: ActionExecutor,
        probe: OutboxWorkerProbe,
        poll_interval_seconds: int = 5,
        batch_size: int = 50,
        max_retries: int = 5,
        repository_factory: Callable[
            [AsyncSession], OutboxRepository
        ] = OutboxRepository,
    ) -> None:
        """Initialize the worker.

        Args:
            session_factory: Factory for creating database sessions
            serializer: Decodes outbox payloads into domain events
            reactor: Maps domain events to actions
            executor: Runs actions against the external gateways
            probe: Observability probe for logging/metrics
            poll_interval_seconds: Delay between polls
            batch_size: Maximum entries to process per batch
            max_retries: Attempts before moving an entry to the DLQ
            repository_factory: Builds the outbox repository for a session
        """
        self._session_factory = session_factory
        self._serializer = serializer
        self._reactor = reactor
        self._executor = executor
        self._probe = probe
        self._poll_interval = poll_interval_seconds
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._repository_factory = repository_factory
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the poll loop."""
        self._running = True
        self._probe.worker_started()
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Gracefully stop the worker and wait for the loop to exit."""
        self._running = False

        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self._probe.worker_stopped()

    async def _poll_loop(self) -> None:
        self._probe.poll_loop_started()

        while self._running:
            try:
                await self.process_batch()
            except Exception as e:
                self._probe.poll_loop_error(repr(e))

            await asyncio.sleep(self._poll_interval)

    async def process_batch(self) -> int:
        """Claim and process one batch of entries.

        Returns:
            Number of entries claimed
        """
        async with self._session_factory() as session:
            async with session.begin():
                repository = self._repository_factory(session)
                entries = await repository.fetch_unprocessed(limit=self._batch_size)
                for entry in entries:
                    await self._process_entry(entry, repository)

        self._probe.batch_processed(len(entries))
        return len(entries)

    async def _process_entry(
        self, entry: OutboxEntry, repository: OutboxRepository
    ) -> None:
        try:
            event = self._serializer.deserialize(entry.event_type, entry.payload)
            actions = self._reactor.react(event)
            self._probe.entry_reacted(entry, len(actions))

            for action in actions:
                await self._executor.run(action)
                self._probe.action_completed(entry, type(action).__name__)

            await repository.mark_processed(entry.id)
            self._probe.entry_processed(entry)

        except Exception as e:
            await self._handle_processing_failure(entry, repr(e), repository)

    async def _handle_processing_failure(
        self,
        entry: OutboxEntry,
        error: str,
        repository: OutboxRepository,
    ) -> None:
        """Increment the retry count, dead-lettering once retries run out."""
        retry_count = entry.retry_count + 1
        dead_letter = retry_count >= self._max_retries

        await repository.record_failure(entry.id, retry_count, error, dead_letter)

        if dead_letter:
            self._probe.entry_dead_lettered(entry, error, retry_count)
        else:
            self._probe.entry_failed(entry, error, retry_count)
