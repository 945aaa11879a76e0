"""Unit test fixtures with in-memory fakes for the persistence ports."""

from __future__ import annotations

import copy
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import Mock

import pytest

from membership.application.locks import AggregateLocks
from membership.application.observability import MembershipServiceProbe
from membership.application.services import MembershipService, WaiverMatchingService
from membership.domain.read_models import Customer, Waiver
from membership.domain.value_objects import PersonIdentity
from membership.infrastructure.membership_repository import MembershipRepository
from shared_kernel.event_store import ConcurrencyError


class FakeSession:
    """Stands in for AsyncSession where only transactions are used."""

    def __init__(self) -> None:
        self.transactions = 0

    @asynccontextmanager
    async def begin(self):
        self.transactions += 1
        yield self


class InMemoryEventStore:
    def __init__(self) -> None:
        self.streams: dict[tuple[str, str], list[Any]] = {}

    async def append(
        self,
        aggregate_type: str,
        aggregate_id: str,
        events: Sequence[Any],
        expected_version: int,
    ) -> int:
        stream = self.streams.setdefault((aggregate_type, aggregate_id), [])
        if len(stream) != expected_version:
            raise ConcurrencyError(
                aggregate_type, aggregate_id, expected_version, len(stream)
            )
        stream.extend(events)
        return len(stream)

    async def replay(self, aggregate_type: str, aggregate_id: str) -> list[Any]:
        return list(self.streams.get((aggregate_type, aggregate_id), []))


class InMemoryOutbox:
    def __init__(self) -> None:
        self.entries: list[tuple[Any, str, str]] = []

    async def append(self, event: Any, aggregate_type: str, aggregate_id: str) -> None:
        self.entries.append((event, aggregate_type, aggregate_id))

    @property
    def event_types(self) -> list[str]:
        return [type(event).__name__ for event, _, _ in self.entries]


class InMemoryCustomerRepository:
    """Returns copies so that only save() changes stored state."""

    def __init__(self) -> None:
        self.customers: dict[int, Customer] = {}

    async def get_by_woo_id(self, woo_id: int) -> Customer | None:
        customer = self.customers.get(woo_id)
        return copy.deepcopy(customer)

    async def find_by_identity(self, identity: PersonIdentity) -> list[Customer]:
        return [
            copy.deepcopy(customer)
            for customer in self.customers.values()
            if not customer.is_deleted and customer.identity == identity
        ]

    async def find_by_card_number(self, number: str) -> list[Customer]:
        return [
            copy.deepcopy(customer)
            for customer in self.customers.values()
            if customer.card(number) is not None
        ]

    async def save(self, customer: Customer) -> None:
        self.customers[customer.woo_id] = copy.deepcopy(customer)

    async def get(self, customer_id: int) -> Customer | None:
        return await self.get_by_woo_id(customer_id)


class InMemoryWaiverRepository:
    def __init__(self) -> None:
        self.waivers: dict[str, Waiver] = {}
        self.locked: list[PersonIdentity] = []

    async def lock_identity(self, identity: PersonIdentity) -> None:
        self.locked.append(identity)

    async def get(self, waiver_id: str) -> Waiver | None:
        return copy.deepcopy(self.waivers.get(waiver_id))

    async def find_accepted_by_identity(self, identity: PersonIdentity) -> list[Waiver]:
        return [
            copy.deepcopy(waiver)
            for waiver in self.waivers.values()
            if waiver.is_accepted and waiver.identity == identity
        ]

    async def save(self, waiver: Waiver) -> None:
        self.waivers[waiver.waiver_id] = copy.deepcopy(waiver)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def outbox() -> InMemoryOutbox:
    return InMemoryOutbox()


@pytest.fixture
def customer_repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


@pytest.fixture
def waiver_repository() -> InMemoryWaiverRepository:
    return InMemoryWaiverRepository()


@pytest.fixture
def membership_repository(
    event_store: InMemoryEventStore, outbox: InMemoryOutbox
) -> MembershipRepository:
    return MembershipRepository(event_store=event_store, outbox=outbox)


@pytest.fixture
def membership_probe() -> Mock:
    return Mock(spec=MembershipServiceProbe)


@pytest.fixture
def membership_service(
    membership_repository: MembershipRepository,
    customer_repository: InMemoryCustomerRepository,
    waiver_repository: InMemoryWaiverRepository,
    membership_probe: Mock,
) -> MembershipService:
    """MembershipService over in-memory streams and read models."""
    return MembershipService(
        session=FakeSession(),
        membership_repository=membership_repository,
        customer_repository=customer_repository,
        waiver_repository=waiver_repository,
        waiver_matching=WaiverMatchingService(waiver_repository, customer_repository),
        locks=AggregateLocks(),
        probe=membership_probe,
    )
