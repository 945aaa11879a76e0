"""Repository protocols (ports) for the membership bounded context.

The aggregate itself is persisted as an event stream; customers and
waivers are read models kept next to it in the same transaction.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from membership.domain.aggregates import MembershipAggregate
from membership.domain.events import WaiverAccepted
from membership.domain.read_models import Customer, Waiver
from membership.domain.value_objects import PersonIdentity


@runtime_checkable
class IMembershipRepository(Protocol):
    """Loads and saves membership aggregates as event streams."""

    async def load(self, customer_id: int) -> MembershipAggregate:
        """Replay a customer's stream. An empty stream yields a fresh aggregate."""
        ...

    async def save(self, aggregate: MembershipAggregate) -> int:
        """Append the aggregate's pending events and their outbox entries.

        Returns:
            The new stream version

        Raises:
            ConcurrencyError: If the stream moved since the aggregate was loaded
        """
        ...

    async def record_waiver_accepted(self, event: WaiverAccepted) -> bool:
        """Start the waiver's own stream with its acceptance.

        Returns:
            False if the waiver stream already exists (a redelivery)
        """
        ...


@runtime_checkable
class ICustomerRepository(Protocol):
    """Persistence for the customer read model (with its cards)."""

    async def get_by_woo_id(self, woo_id: int) -> Customer | None:
        ...

    async def find_by_identity(self, identity: PersonIdentity) -> list[Customer]:
        """Customers, deleted ones excluded, whose name and email match exactly."""
        ...

    async def find_by_card_number(self, number: str) -> list[Customer]:
        """Customers holding a card with this (canonicalised) number."""
        ...

    async def save(self, customer: Customer) -> None:
        ...


@runtime_checkable
class IWaiverRepository(Protocol):
    """Persistence for the waiver read model."""

    async def lock_identity(self, identity: PersonIdentity) -> None:
        """Serialize waiver matching for one identity until the transaction ends.

        Both matching paths take this lock before reading the other side, so
        of two concurrent facts for the same person the later one always
        sees the committed earlier one.
        """
        ...

    async def get(self, waiver_id: str) -> Waiver | None:
        ...

    async def find_accepted_by_identity(self, identity: PersonIdentity) -> list[Waiver]:
        ...

    async def save(self, waiver: Waiver) -> None:
        ...


@runtime_checkable
class ICustomerLookup(Protocol):
    """Read-only customer access used by the action runner.

    Actions run outside the transaction that recorded their event, so
    the lookup opens its own short-lived session per call.
    """

    async def get(self, customer_id: int) -> Customer | None:
        ...
