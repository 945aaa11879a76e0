"""Bulk import from the e-commerce platform."""

from __future__ import annotations

from dataclasses import dataclass

from membership.application.observability import (
    DefaultImportServiceProbe,
    ImportServiceProbe,
)
from membership.application.services.membership_service import MembershipService
from membership.application.value_objects import CustomerFact, SubscriptionFact
from shared_kernel.integrations.woocommerce import CommerceSource


@dataclass(frozen=True)
class ImportResult:
    customers: int
    subscriptions: int
    skipped: int


class ImportService:
    """Feeds every customer, then every subscription, through the
    ``*_imported`` operations.

    Customers go first so that subscription facts find a profile to
    project onto. Records that cannot be parsed are skipped and reported;
    gateway errors abort the import.
    """

    def __init__(
        self,
        source: CommerceSource,
        membership_service: MembershipService,
        probe: ImportServiceProbe | None = None,
    ):
        self._source = source
        self._membership = membership_service
        self._probe = probe or DefaultImportServiceProbe()

    async def import_all(self) -> ImportResult:
        self._probe.import_started()
        skipped = 0

        customers = 0
        for payload in await self._source.list_customers():
            try:
                customer = CustomerFact.from_woocommerce(payload)
            except ValueError as e:
                self._probe.record_skipped("customer", payload.get("id"), str(e))
                skipped += 1
                continue
            await self._membership.customer_imported(customer)
            customers += 1

        subscriptions = 0
        for payload in await self._source.list_subscriptions():
            try:
                subscription = SubscriptionFact.from_woocommerce(payload)
            except ValueError as e:
                self._probe.record_skipped("subscription", payload.get("id"), str(e))
                skipped += 1
                continue
            await self._membership.subscription_imported(subscription)
            subscriptions += 1

        self._probe.import_completed(customers, subscriptions)
        return ImportResult(
            customers=customers, subscriptions=subscriptions, skipped=skipped
        )
