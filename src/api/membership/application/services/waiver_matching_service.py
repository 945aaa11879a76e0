"""Links waivers and customers by exact identity match.

Matching is bidirectional: a customer fact looks for accepted waivers, and
an accepted waiver looks for customers. Whichever side arrives later makes
the match. Both paths go through this service.
"""

from __future__ import annotations

from membership.domain.aggregates import MembershipAggregate
from membership.domain.read_models import Waiver
from membership.ports.repositories import ICustomerRepository, IWaiverRepository


class WaiverMatchingService:
    """Finds (waiver, customer) pairs whose first name, last name and email
    are all equal."""

    def __init__(
        self,
        waiver_repository: IWaiverRepository,
        customer_repository: ICustomerRepository,
    ):
        self._waivers = waiver_repository
        self._customers = customer_repository

    async def assign_matching_waivers(
        self, aggregate: MembershipAggregate
    ) -> list[str]:
        """Assign every matching accepted waiver not yet linked to the customer.

        Returns:
            Ids of the waivers newly assigned
        """
        identity = aggregate.identity
        if identity is None or aggregate.deleted:
            return []

        await self._waivers.lock_identity(identity)
        assigned = []
        for waiver in await self._waivers.find_accepted_by_identity(identity):
            if aggregate.assign_waiver(waiver.waiver_id):
                assigned.append(waiver.waiver_id)
        return assigned

    async def customers_matching(self, waiver: Waiver) -> list[int]:
        """Ids of the customers a waiver matches right now."""
        identity = waiver.identity
        if identity is None or not waiver.is_accepted:
            return []

        await self._waivers.lock_identity(identity)
        customers = await self._customers.find_by_identity(identity)
        return [customer.woo_id for customer in customers]

    @staticmethod
    def assign_if_matching(aggregate: MembershipAggregate, waiver: Waiver) -> bool:
        """Assign ``waiver`` if the customer still matches it."""
        if aggregate.deleted or waiver.identity is None:
            return False
        if aggregate.identity != waiver.identity:
            return False
        return aggregate.assign_waiver(waiver.waiver_id)
