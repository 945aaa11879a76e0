"""Infrastructure layer for the outbox pattern.

Contains the SQLAlchemy model, repository implementation, composite
handlers and the reactor worker.
"""

from infrastructure.outbox.composite import CompositeReactor, CompositeSerializer
from infrastructure.outbox.models import OutboxModel
from infrastructure.outbox.repository import OutboxRepository
from infrastructure.outbox.worker import ReactorWorker

__all__ = [
    "CompositeReactor",
    "CompositeSerializer",
    "OutboxModel",
    "OutboxRepository",
    "ReactorWorker",
]
