"""PostgreSQL backed event store."""

from infrastructure.event_store.models import StoredEventModel
from infrastructure.event_store.store import SqlAlchemyEventStore

__all__ = ["SqlAlchemyEventStore", "StoredEventModel"]
