"""Customer domain events.

Primary facts reported by the e-commerce platform about a customer's
profile. Created and updated events come from webhooks; imported events
come from bulk imports and assume the external systems are already in
sync with the customer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CustomerProfileEvent:
    """Fields shared by every customer profile fact.

    Attributes:
        customer_id: E-commerce customer id
        username: Login name, if any
        first_name: Given name as entered by the customer
        last_name: Family name as entered by the customer
        email: Email in canonical (lower) case
        slack_id: Linked chat account id, if any
        capabilities: Capability names granted to the customer
        card_numbers: Canonical access card numbers on the profile
        occurred_at: When the event occurred (UTC)
    """

    customer_id: int
    username: str | None
    first_name: str | None
    last_name: str | None
    email: str | None
    slack_id: str | None
    capabilities: tuple[str, ...]
    card_numbers: tuple[str, ...]
    occurred_at: datetime


@dataclass(frozen=True)
class CustomerCreated(CustomerProfileEvent):
    """Event raised when a customer signs up."""


@dataclass(frozen=True)
class CustomerUpdated(CustomerProfileEvent):
    """Event raised when a customer's profile changes."""


@dataclass(frozen=True)
class CustomerImported(CustomerProfileEvent):
    """Event raised when a customer is pulled in by a bulk import."""


@dataclass(frozen=True)
class CustomerDeleted:
    """Event raised when a customer is deleted upstream.

    The customer read model is soft deleted; the stream is kept.
    """

    customer_id: int
    occurred_at: datetime
