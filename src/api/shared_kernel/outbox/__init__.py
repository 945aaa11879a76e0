"""Outbox pattern implementation for reacting to domain events.

Stored domain events are mirrored into the outbox in the same transaction
and processed asynchronously by the reactor worker, which turns them into
idempotent side-effecting actions.
"""

from shared_kernel.outbox.ports import (
    ActionExecutor,
    EventReactor,
    EventSerializer,
    IOutboxRepository,
)
from shared_kernel.outbox.value_objects import OutboxEntry

__all__ = [
    "ActionExecutor",
    "EventReactor",
    "EventSerializer",
    "IOutboxRepository",
    "OutboxEntry",
]
