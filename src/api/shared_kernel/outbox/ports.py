"""Protocols (ports) for the outbox pattern.

These protocols define the interfaces for outbox operations. They enable
a plugin architecture where each bounded context registers its own event
serializers and reactors without shared_kernel knowing about them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.outbox.value_objects import OutboxEntry


@runtime_checkable
class IOutboxRepository(Protocol):
    """Repository for outbox entry persistence.

    The repository shares the same database session as the calling service,
    ensuring that event appends happen within the same transaction as the
    stored events they mirror.
    """

    async def append(self, event: Any, aggregate_type: str, aggregate_id: str) -> None:
        """Append a domain event to the outbox within the current transaction.

        Args:
            event: The domain event to append
            aggregate_type: Type of aggregate (e.g., "membership")
            aggregate_id: Identifier of the aggregate stream
        """
        ...

    async def fetch_unprocessed(self, limit: int = 100) -> list["OutboxEntry"]:
        """Fetch unprocessed entries ordered by creation time.

        Uses FOR UPDATE SKIP LOCKED for safe concurrent access when multiple
        workers are running.
        """
        ...

    async def mark_processed(self, entry_id: str) -> None:
        """Mark an entry as processed."""
        ...


@runtime_checkable
class EventReactor(Protocol):
    """Maps a decoded domain event to the follow-up actions it implies.

    Reactors are pure: they never call a gateway themselves. Each bounded
    context provides its own reactors and registers them with the
    composite reactor used by the worker.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this reactor subscribes to.

        Returns:
            Frozenset of event type names (e.g., {"MembershipActivated"})
        """
        ...

    def react(self, event: Any) -> list[Any]:
        """Return the actions to schedule for an event.

        Args:
            event: The decoded domain event

        Returns:
            List of action value objects, possibly empty
        """
        ...


@runtime_checkable
class ActionExecutor(Protocol):
    """Executes a single action against the external gateways.

    Implementations must be idempotent: the worker re-runs every action of
    an entry when any one of them fails.
    """

    async def run(self, action: Any) -> None:
        """Execute an action.

        Raises:
            GatewayError: If the action could not be completed
        """
        ...


@runtime_checkable
class EventSerializer(Protocol):
    """Serializes and deserializes domain events.

    Each bounded context provides its own implementation that knows how to
    serialize its domain events to JSON-compatible dictionaries and
    deserialize them back. This keeps shared_kernel agnostic of specific
    domain event structures.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        ...

    def serialize(self, event: Any) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Raises:
            ValueError: If the event type is not supported
        """
        ...

    def deserialize(
        self,
        event_type: str,
        payload: dict[str, Any],
    ) -> Any:
        """Reconstruct a domain event from a payload.

        Raises:
            ValueError: If the event type is not supported
        """
        ...

