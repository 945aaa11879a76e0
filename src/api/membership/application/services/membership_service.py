"""Membership application service.

The single entry point for external facts about customers. Every fact
follows the same steps under the customer's lock and inside one
transaction: replay the stream, run the aggregate command, match waivers,
refresh the customer read model and append the new events together with
their outbox entries.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from membership.application.locks import AggregateLocks
from membership.application.observability import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)
from membership.application.services.waiver_matching_service import (
    WaiverMatchingService,
)
from membership.application.value_objects import (
    CustomerFact,
    SubscriptionFact,
    UserMembershipFact,
)
from membership.domain.aggregates import MembershipAggregate
from membership.domain.events import (
    DomainEvent,
    MembershipActivated,
    MembershipDeactivated,
    WaiverAccepted,
    WaiverAssignedToCustomer,
)
from membership.domain.read_models import Customer, Waiver
from membership.ports.repositories import (
    ICustomerRepository,
    IMembershipRepository,
    IWaiverRepository,
)
from shared_kernel.access_cards import canonical_card_number


class MembershipService:
    """Application service recording external facts as membership events.

    Manages database transactions; repositories never commit.
    """

    def __init__(
        self,
        session: AsyncSession,
        membership_repository: IMembershipRepository,
        customer_repository: ICustomerRepository,
        waiver_repository: IWaiverRepository,
        waiver_matching: WaiverMatchingService,
        locks: AggregateLocks,
        probe: MembershipServiceProbe | None = None,
    ):
        """Initialize MembershipService with dependencies.

        Args:
            session: Database session for transaction management
            membership_repository: Event stream persistence for aggregates
            customer_repository: Customer read model persistence
            waiver_repository: Waiver read model persistence
            waiver_matching: Waiver/customer matching, shared by both paths
            locks: Process-wide per-customer locks
            probe: Optional domain probe for observability
        """
        self._session = session
        self._memberships = membership_repository
        self._customers = customer_repository
        self._waivers = waiver_repository
        self._waiver_matching = waiver_matching
        self._locks = locks
        self._probe = probe or DefaultMembershipServiceProbe()

    async def _record(
        self,
        fact: str,
        customer_id: int,
        command: Callable[[MembershipAggregate], Any],
        match_waivers: bool = False,
    ) -> tuple[DomainEvent, ...]:
        try:
            async with self._locks.lock_for(customer_id):
                async with self._session.begin():
                    aggregate = await self._memberships.load(customer_id)
                    command(aggregate)
                    if match_waivers:
                        await self._waiver_matching.assign_matching_waivers(aggregate)

                    events = aggregate.pending_events
                    if not events:
                        return ()

                    await self._refresh_customer(aggregate)
                    version = await self._memberships.save(aggregate)
        except Exception as e:
            self._probe.fact_recording_failed(fact, customer_id, str(e))
            raise

        self._report(fact, customer_id, events, version)
        return events

    def _report(
        self,
        fact: str,
        customer_id: int,
        events: tuple[DomainEvent, ...],
        version: int,
    ) -> None:
        self._probe.fact_recorded(
            fact, customer_id, [type(event).__name__ for event in events], version
        )
        for event in events:
            match event:
                case MembershipActivated():
                    self._probe.membership_activated_recorded(customer_id)
                case MembershipDeactivated():
                    self._probe.membership_deactivated_recorded(customer_id)
                case WaiverAssignedToCustomer():
                    self._probe.waiver_assigned(event.waiver_id, customer_id)

    async def _refresh_customer(self, aggregate: MembershipAggregate) -> None:
        customer = await self._customers.get_by_woo_id(aggregate.customer_id)
        if customer is None:
            customer = Customer(woo_id=aggregate.customer_id)

        if aggregate.profile is not None:
            customer.apply_profile(aggregate.profile)
        # Cached projection of the live check, never of currently_a_member
        customer.member = aggregate.is_member
        if aggregate.deleted:
            customer.soft_delete()

        await self._customers.save(customer)

    # -- customer facts ---------------------------------------------------

    async def customer_created(self, fact: CustomerFact) -> tuple[DomainEvent, ...]:
        return await self._record(
            "customer_created",
            fact.customer_id,
            lambda aggregate: aggregate.create_customer(fact.profile),
            match_waivers=True,
        )

    async def customer_updated(self, fact: CustomerFact) -> tuple[DomainEvent, ...]:
        return await self._record(
            "customer_updated",
            fact.customer_id,
            lambda aggregate: aggregate.update_customer(fact.profile),
            match_waivers=True,
        )

    async def customer_imported(self, fact: CustomerFact) -> tuple[DomainEvent, ...]:
        return await self._record(
            "customer_imported",
            fact.customer_id,
            lambda aggregate: aggregate.import_customer(fact.profile),
            match_waivers=True,
        )

    async def customer_deleted(self, customer_id: int) -> tuple[DomainEvent, ...]:
        return await self._record(
            "customer_deleted",
            customer_id,
            lambda aggregate: aggregate.delete_customer(),
        )

    # -- subscription facts -----------------------------------------------

    async def subscription_created(
        self, fact: SubscriptionFact
    ) -> tuple[DomainEvent, ...]:
        return await self._record(
            "subscription_created",
            fact.customer_id,
            lambda aggregate: aggregate.create_subscription(
                fact.subscription_id, fact.status
            ),
        )

    async def subscription_updated(
        self, fact: SubscriptionFact
    ) -> tuple[DomainEvent, ...]:
        return await self._record(
            "subscription_updated",
            fact.customer_id,
            lambda aggregate: aggregate.update_subscription(
                fact.subscription_id, fact.status
            ),
        )

    async def subscription_imported(
        self, fact: SubscriptionFact
    ) -> tuple[DomainEvent, ...]:
        return await self._record(
            "subscription_imported",
            fact.customer_id,
            lambda aggregate: aggregate.import_subscription(
                fact.subscription_id, fact.status
            ),
        )

    async def user_membership_created(
        self, fact: UserMembershipFact
    ) -> tuple[DomainEvent, ...]:
        return await self._record(
            "user_membership_created",
            fact.customer_id,
            lambda aggregate: aggregate.create_user_membership(
                fact.membership_id, fact.plan_id, fact.status
            ),
        )

    # -- waivers ----------------------------------------------------------

    async def waiver_accepted(self, waiver: Waiver) -> list[int]:
        """Store an accepted waiver and assign it to every matching customer.

        Waivers in any other status are ignored.

        Returns:
            Ids of the customers the waiver was newly assigned to
        """
        if not waiver.is_accepted:
            self._probe.waiver_ignored(waiver.waiver_id, waiver.status)
            return []

        async with self._session.begin():
            await self._waivers.save(waiver)
            first_delivery = await self._memberships.record_waiver_accepted(
                WaiverAccepted(
                    waiver_id=waiver.waiver_id,
                    template_id=waiver.template_id,
                    template_version=waiver.template_version,
                    first_name=waiver.first_name,
                    last_name=waiver.last_name,
                    email=waiver.email,
                    occurred_at=datetime.now(UTC),
                )
            )
            customer_ids = await self._waiver_matching.customers_matching(waiver)

        if not first_delivery:
            self._probe.waiver_already_recorded(waiver.waiver_id)

        assigned = []
        for customer_id in customer_ids:
            events = await self._record(
                "waiver_accepted",
                customer_id,
                lambda aggregate: WaiverMatchingService.assign_if_matching(
                    aggregate, waiver
                ),
            )
            if events:
                assigned.append(customer_id)
        return assigned

    # -- cards ------------------------------------------------------------

    async def card_access_changed(self, number: str, active: bool) -> int:
        """Mirror the card system's view of one card onto every holder.

        Returns:
            Number of customers holding the card
        """
        number = canonical_card_number(number)
        async with self._session.begin():
            holders = await self._customers.find_by_card_number(number)

        for holder in holders:
            async with self._locks.lock_for(holder.woo_id):
                async with self._session.begin():
                    customer = await self._customers.get_by_woo_id(holder.woo_id)
                    card = None if customer is None else customer.card(number)
                    if card is None:
                        continue
                    if active:
                        card.activate()
                    else:
                        card.deactivate()
                    await self._customers.save(customer)

        self._probe.card_access_changed(number, active, len(holders))
        return len(holders)
