"""Observability probe for the reactor worker.

Entries are logged by id and stream so that a dead-lettered event can be
traced back to the customer whose history produced it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.outbox.value_objects import OutboxEntry

logger = structlog.get_logger()


class OutboxWorkerProbe(Protocol):
    """Protocol for reactor worker observability."""

    def worker_started(self) -> None: ...

    def worker_stopped(self) -> None: ...

    def poll_loop_started(self) -> None: ...

    def poll_loop_error(self, error: str) -> None:
        """Called when claiming a batch failed; the loop keeps polling."""
        ...

    def batch_processed(self, count: int) -> None: ...

    def reactor_registered(
        self, context_name: str, event_types: frozenset[str]
    ) -> None: ...

    def entry_reacted(self, entry: OutboxEntry, action_count: int) -> None:
        """Called when reactors have mapped an entry's event to actions.

        Zero actions is normal for events nobody subscribes to, such as
        subscription status observations that crossed no threshold.
        """
        ...

    def action_completed(self, entry: OutboxEntry, action: str) -> None: ...

    def entry_processed(self, entry: OutboxEntry) -> None:
        """Called when every action of an entry completed."""
        ...

    def entry_failed(self, entry: OutboxEntry, error: str, retry_count: int) -> None:
        """Called when an attempt failed and the entry stays pending."""
        ...

    def entry_dead_lettered(
        self, entry: OutboxEntry, error: str, retry_count: int
    ) -> None:
        """Called when an entry ran out of retries."""
        ...


class DefaultOutboxWorkerProbe:
    """Default implementation of OutboxWorkerProbe using structlog."""

    def __init__(self) -> None:
        self._log = logger.bind(component="reactor_worker")

    @staticmethod
    def _entry_kwargs(entry: OutboxEntry) -> dict[str, str]:
        return {
            "entry_id": entry.id,
            "stream": entry.stream,
            "event_type": entry.event_type,
        }

    def worker_started(self) -> None:
        self._log.info("reactor_worker_started")

    def worker_stopped(self) -> None:
        self._log.info("reactor_worker_stopped")

    def poll_loop_started(self) -> None:
        self._log.info("reactor_poll_loop_started")

    def poll_loop_error(self, error: str) -> None:
        self._log.warning("reactor_poll_loop_error", error=error)

    def batch_processed(self, count: int) -> None:
        if count > 0:
            self._log.info("reactor_batch_processed", count=count)

    def reactor_registered(
        self, context_name: str, event_types: frozenset[str]
    ) -> None:
        self._log.info(
            "reactor_registered",
            context=context_name,
            event_types=sorted(event_types),
        )

    def entry_reacted(self, entry: OutboxEntry, action_count: int) -> None:
        self._log.debug(
            "reactor_entry_reacted",
            action_count=action_count,
            **self._entry_kwargs(entry),
        )

    def action_completed(self, entry: OutboxEntry, action: str) -> None:
        self._log.info(
            "reactor_action_completed", action=action, **self._entry_kwargs(entry)
        )

    def entry_processed(self, entry: OutboxEntry) -> None:
        self._log.info("reactor_entry_processed", **self._entry_kwargs(entry))

    def entry_failed(self, entry: OutboxEntry, error: str, retry_count: int) -> None:
        self._log.warning(
            "reactor_entry_failed",
            error=error,
            retry_count=retry_count,
            **self._entry_kwargs(entry),
        )

    def entry_dead_lettered(
        self, entry: OutboxEntry, error: str, retry_count: int
    ) -> None:
        self._log.error(
            "reactor_entry_dead_lettered",
            error=error,
            retry_count=retry_count,
            **self._entry_kwargs(entry),
        )
