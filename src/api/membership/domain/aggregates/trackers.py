"""State-transition modules composed by the membership aggregate.

Each tracker owns one slice of derived state. ``apply`` is a pure state
transition that ignores events outside its slice; ``decide`` inspects the
already-applied state and returns the derived events a fact implies,
without recording them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from membership.domain.events import (
    CustomerBecameBoardMember,
    CustomerImported,
    CustomerRemovedFromBoard,
    DomainEvent,
    MembershipActivated,
    MembershipDeactivated,
    SubscriptionStatusEvent,
    WaiverAssignedToCustomer,
)
from membership.domain.value_objects import (
    BOARD_CAPABILITY,
    IDENTITY_CHECK_STATUSES,
    INACTIVE_STATUSES,
    SubscriptionStatus,
)


@dataclass
class SubscriptionStatusTracker:
    """Per-subscription status history for one customer.

    ``statuses`` holds the latest status of every subscription ever seen;
    ``previous_statuses`` holds the status each one had before its latest
    observation (None for a first sighting).

    ``currently_a_member`` is set the first time any subscription is seen
    active and is never cleared: it means "was ever activated". Whether
    the customer is a member right now is ``has_active_subscription``.
    """

    statuses: dict[int, str] = field(default_factory=dict)
    previous_statuses: dict[int, str | None] = field(default_factory=dict)
    currently_a_member: bool = False

    @property
    def has_active_subscription(self) -> bool:
        return any(
            status == SubscriptionStatus.ACTIVE for status in self.statuses.values()
        )

    def apply(self, event: DomainEvent) -> None:
        if not isinstance(event, SubscriptionStatusEvent):
            return

        self.previous_statuses[event.subscription_id] = self.statuses.get(
            event.subscription_id
        )
        self.statuses[event.subscription_id] = event.status

        if event.status == SubscriptionStatus.ACTIVE:
            self.currently_a_member = True

    def decide(
        self, customer_id: int, subscription_id: int, occurred_at: datetime
    ) -> list[DomainEvent]:
        """Derive activation/deactivation for the latest observation.

        Must run right after the observation was applied. An unchanged
        status is a renewal and implies nothing.
        """
        new_status = self.statuses[subscription_id]
        old_status = self.previous_statuses.get(subscription_id)

        if new_status == old_status:
            return []

        derived: list[DomainEvent] = []

        if (
            old_status is None or old_status in IDENTITY_CHECK_STATUSES
        ) and new_status == SubscriptionStatus.ACTIVE:
            derived.append(
                MembershipActivated(customer_id=customer_id, occurred_at=occurred_at)
            )

        if new_status in INACTIVE_STATUSES and not self.has_active_subscription:
            derived.append(
                MembershipDeactivated(customer_id=customer_id, occurred_at=occurred_at)
            )

        return derived


@dataclass
class BoardMembershipTracker:
    """Whether the customer currently sits on the board."""

    is_board_member: bool = False

    def apply(self, event: DomainEvent) -> None:
        match event:
            case CustomerBecameBoardMember():
                self.is_board_member = True
            case CustomerRemovedFromBoard():
                self.is_board_member = False
            case CustomerImported():
                # Imports assume the external systems already reflect the board
                self.is_board_member = BOARD_CAPABILITY in event.capabilities

    def decide(
        self,
        customer_id: int,
        capabilities: tuple[str, ...],
        occurred_at: datetime,
    ) -> list[DomainEvent]:
        wants_board = BOARD_CAPABILITY in capabilities

        if wants_board and not self.is_board_member:
            return [
                CustomerBecameBoardMember(
                    customer_id=customer_id, occurred_at=occurred_at
                )
            ]
        if not wants_board and self.is_board_member:
            return [
                CustomerRemovedFromBoard(
                    customer_id=customer_id, occurred_at=occurred_at
                )
            ]
        return []


@dataclass
class WaiverAssignmentTracker:
    """Waivers already linked to the customer."""

    assigned_waiver_ids: set[str] = field(default_factory=set)

    def apply(self, event: DomainEvent) -> None:
        if isinstance(event, WaiverAssignedToCustomer):
            self.assigned_waiver_ids.add(event.waiver_id)

    def decide(
        self, customer_id: int, waiver_id: str, occurred_at: datetime
    ) -> list[DomainEvent]:
        if waiver_id in self.assigned_waiver_ids:
            return []
        return [
            WaiverAssignedToCustomer(
                customer_id=customer_id,
                waiver_id=waiver_id,
                occurred_at=occurred_at,
            )
        ]
