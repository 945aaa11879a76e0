"""Membership event serializer for the event store and the outbox.

Events are converted to JSON-compatible dictionaries on the way in and
reconstructed as typed events on the way out. This is the only place
membership events are encoded or decoded.
"""

from __future__ import annotations

from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, get_args

from membership.domain.events import DomainEvent

# Derive supported events from the DomainEvent type alias
_SUPPORTED_EVENTS: frozenset[str] = frozenset(
    cls.__name__ for cls in get_args(DomainEvent)
)

# Build registry mapping event type names to classes
_EVENT_REGISTRY: dict[str, type] = {cls.__name__: cls for cls in get_args(DomainEvent)}

# Fields stored as JSON lists but typed as tuples on the events
_TUPLE_FIELDS = frozenset({"capabilities", "card_numbers"})


class MembershipEventSerializer:
    """Serializes and deserializes membership domain events."""

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        return _SUPPORTED_EVENTS

    def serialize(self, event: DomainEvent) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Raises:
            ValueError: If the event type is not supported
        """
        event_type = type(event).__name__
        if event_type not in _SUPPORTED_EVENTS:
            raise ValueError(f"Unsupported event type: {event_type}")

        data = asdict(event)
        for key, value in list(data.items()):
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, tuple):
                data[key] = list(value)
        return data

    def deserialize(self, event_type: str, payload: dict[str, Any]) -> DomainEvent:
        """Reconstruct a domain event from a payload.

        Keys the event class does not know are dropped, so payloads written
        by an older version with extra fields still load.

        Raises:
            ValueError: If the event type is not supported
        """
        event_class = _EVENT_REGISTRY.get(event_type)
        if event_class is None:
            raise ValueError(f"Unsupported event type: {event_type}")

        known = {field.name for field in fields(event_class)}
        data = {key: value for key, value in payload.items() if key in known}

        if "occurred_at" in data:
            data["occurred_at"] = datetime.fromisoformat(data["occurred_at"])
        for key in _TUPLE_FIELDS & data.keys():
            data[key] = tuple(data[key] or ())

        return event_class(**data)
