"""Event store protocol.

Streams are identified by (aggregate_type, aggregate_id). Events are
typed domain events on both sides of the port: encoding and decoding
happens once, inside the store.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IEventStore(Protocol):
    """Append-only, per-stream ordered log of domain events."""

    async def append(
        self,
        aggregate_type: str,
        aggregate_id: str,
        events: Sequence[Any],
        expected_version: int,
    ) -> int:
        """Append events after the given stream version.

        Args:
            aggregate_type: Stream family (e.g., "membership")
            aggregate_id: Stream identifier within the family
            events: Events in the order they occurred
            expected_version: Number of events the caller replayed

        Returns:
            The new stream version

        Raises:
            ConcurrencyError: If the stream is no longer at expected_version
        """
        ...

    async def replay(self, aggregate_type: str, aggregate_id: str) -> list[Any]:
        """Return every event of the stream in append order."""
        ...
