"""SQLAlchemy ORM models for the membership bounded context.

These models hold read models only; the source of truth is the event
stream in ``stored_events``.
"""

from membership.infrastructure.models.customer import CardModel, CustomerModel
from membership.infrastructure.models.waiver import WaiverModel

__all__ = [
    "CardModel",
    "CustomerModel",
    "WaiverModel",
]
