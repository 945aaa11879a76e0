"""Value objects for the reactor outbox."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class OutboxEntry:
    """A pending outbox row, as claimed by the reactor worker.

    Only rows that are neither processed nor dead-lettered are ever read
    back, so the processing and failure timestamps stay in the table.

    Attributes:
        id: ULID of the row
        aggregate_type: Stream type of the source event (e.g. "membership")
        aggregate_id: Stream id of the source event (the customer id)
        event_type: Class name of the domain event
        payload: The event as encoded by the context's serializer
        occurred_at: When the domain event happened
        retry_count: Failed attempts so far
        last_error: Error of the most recent failed attempt
    """

    id: str
    aggregate_type: str
    aggregate_id: str
    event_type: str
    payload: dict[str, Any]
    occurred_at: datetime
    retry_count: int = 0
    last_error: str | None = None

    @property
    def stream(self) -> str:
        return f"{self.aggregate_type}/{self.aggregate_id}"
