"""Append-only event store ports shared by event-sourced aggregates."""

from shared_kernel.event_store.exceptions import ConcurrencyError
from shared_kernel.event_store.ports import IEventStore

__all__ = ["ConcurrencyError", "IEventStore"]
