"""Composite handlers for the outbox pattern.

These classes aggregate context-specific reactors and serializers,
delegating to the appropriate ones based on event type. This enables the
plugin architecture where each bounded context registers its own handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shared_kernel.outbox.ports import EventReactor, EventSerializer

if TYPE_CHECKING:
    from shared_kernel.outbox.observability import OutboxWorkerProbe


class CompositeReactor:
    """Fans an event out to every reactor subscribed to its type.

    Unlike serializers, several reactors may subscribe to the same event
    type (a membership activation concerns both the chat platform and the
    mailing groups). Actions are returned in registration order. An event
    type nobody subscribes to yields no actions.
    """

    def __init__(self, probe: "OutboxWorkerProbe | None" = None) -> None:
        """Initialize with no reactors.

        Args:
            probe: Optional observability probe for logging registrations
        """
        self._reactors: list[EventReactor] = []
        self._type_index: dict[str, list[EventReactor]] = {}
        self._probe = probe

    def register(self, reactor: EventReactor, context_name: str | None = None) -> None:
        """Register a reactor.

        Args:
            reactor: The reactor to register
            context_name: Optional name for logs (defaults to class name)
        """
        self._reactors.append(reactor)
        event_types = reactor.supported_event_types()

        for event_type in event_types:
            self._type_index.setdefault(event_type, []).append(reactor)

        if self._probe is not None:
            name = context_name if context_name is not None else type(reactor).__name__
            self._probe.reactor_registered(name, event_types)

    def supported_event_types(self) -> frozenset[str]:
        """Return all event types at least one reactor subscribes to."""
        return frozenset(self._type_index)

    def react(self, event: Any) -> list[Any]:
        """Collect the actions every subscribed reactor schedules for an event."""
        actions: list[Any] = []
        for reactor in self._type_index.get(type(event).__name__, []):
            actions.extend(reactor.react(event))
        return actions


class CompositeSerializer:
    """Delegates serialization to context-specific serializers.

    This class implements the EventSerializer protocol by aggregating
    multiple serializers and routing to the appropriate one based on
    the event type.
    """

    def __init__(self) -> None:
        """Initialize with empty serializer list."""
        self._serializers: list[EventSerializer] = []
        self._type_cache: dict[str, EventSerializer] = {}

    def register(self, serializer: EventSerializer) -> None:
        """Register a context-specific serializer.

        Raises:
            ValueError: If another serializer already claims one of its types
        """
        for event_type in serializer.supported_event_types():
            if event_type in self._type_cache:
                raise ValueError(
                    f"Event type {event_type} already has a registered serializer"
                )

        self._serializers.append(serializer)
        for event_type in serializer.supported_event_types():
            self._type_cache[event_type] = serializer

    def supported_event_types(self) -> frozenset[str]:
        """Return all supported event types across all serializers."""
        return frozenset(self._type_cache)

    def _serializer_for(self, event_type: str) -> EventSerializer:
        serializer = self._type_cache.get(event_type)
        if serializer is None:
            raise ValueError(
                f"No serializer registered for event type: {event_type}. "
                f"Registered types: {sorted(self._type_cache.keys())}"
            )
        return serializer

    def serialize(self, event: Any) -> dict[str, Any]:
        """Serialize a domain event to a dictionary.

        Raises:
            ValueError: If no serializer is registered for the event type
        """
        return self._serializer_for(type(event).__name__).serialize(event)

    def deserialize(
        self,
        event_type: str,
        payload: dict[str, Any],
    ) -> Any:
        """Reconstruct a domain event from a payload.

        Raises:
            ValueError: If no serializer is registered for the event type
        """
        return self._serializer_for(event_type).deserialize(event_type, payload)
