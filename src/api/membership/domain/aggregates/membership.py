"""Membership aggregate for the membership context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from membership.domain.aggregates.trackers import (
    BoardMembershipTracker,
    SubscriptionStatusTracker,
    WaiverAssignmentTracker,
)
from membership.domain.events import (
    CustomerCreated,
    CustomerDeleted,
    CustomerImported,
    CustomerProfileEvent,
    CustomerUpdated,
    SubscriptionCreated,
    SubscriptionImported,
    SubscriptionStatusEvent,
    SubscriptionUpdated,
    UserMembershipCreated,
)
from membership.domain.value_objects import CustomerProfile, PersonIdentity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from membership.domain.events import DomainEvent


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class MembershipAggregate:
    """Event-sourced membership state of one customer.

    The aggregate is rebuilt by replaying the customer's stream. Replay
    only applies events: it never decides anything and never calls out,
    so replaying the same history always yields the same state.

    Commands record the primary fact first, then ask the tracker modules
    which derived events (activation, deactivation, board changes, waiver
    assignment) the fact implies and record those too. Gateways are never
    called here; reactors turn the recorded events into actions.

    Event collection:
    - Every recorded event is applied immediately
    - Events can be collected via collect_events() for persistence
    - ``version`` counts the events already persisted in the stream
    """

    customer_id: int
    version: int = 0
    profile: CustomerProfile | None = None
    deleted: bool = False
    subscriptions: SubscriptionStatusTracker = field(
        default_factory=SubscriptionStatusTracker
    )
    board: BoardMembershipTracker = field(default_factory=BoardMembershipTracker)
    waivers: WaiverAssignmentTracker = field(default_factory=WaiverAssignmentTracker)
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def replay(
        cls, customer_id: int, events: Iterable[DomainEvent]
    ) -> MembershipAggregate:
        """Rebuild the aggregate from its stored history."""
        aggregate = cls(customer_id=customer_id)
        for event in events:
            aggregate.apply(event)
            aggregate.version += 1
        return aggregate

    # -- state ------------------------------------------------------------

    @property
    def is_member(self) -> bool:
        """Live membership: at least one subscription is active right now."""
        return self.subscriptions.has_active_subscription

    @property
    def currently_a_member(self) -> bool:
        """Whether the customer was ever activated."""
        return self.subscriptions.currently_a_member

    @property
    def is_board_member(self) -> bool:
        return self.board.is_board_member

    @property
    def identity(self) -> PersonIdentity | None:
        return None if self.profile is None else self.profile.identity

    def has_waiver(self, waiver_id: str) -> bool:
        return waiver_id in self.waivers.assigned_waiver_ids

    def apply(self, event: DomainEvent) -> None:
        """Pure state transition for one event."""
        match event:
            case CustomerProfileEvent():
                self.profile = CustomerProfile(
                    username=event.username,
                    first_name=event.first_name,
                    last_name=event.last_name,
                    email=event.email,
                    slack_id=event.slack_id,
                    capabilities=event.capabilities,
                    card_numbers=event.card_numbers,
                )
            case CustomerDeleted():
                self.deleted = True

        self.subscriptions.apply(event)
        self.board.apply(event)
        self.waivers.apply(event)

    def _record_that(self, event: DomainEvent) -> None:
        self.apply(event)
        self._pending_events.append(event)

    # -- commands ---------------------------------------------------------

    def _record_profile(
        self,
        event_class: type[CustomerProfileEvent],
        profile: CustomerProfile,
        occurred_at: datetime,
    ) -> CustomerProfileEvent:
        event = event_class(
            customer_id=self.customer_id,
            username=profile.username,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            slack_id=profile.slack_id,
            capabilities=profile.capabilities,
            card_numbers=profile.card_numbers,
            occurred_at=occurred_at,
        )
        self._record_that(event)
        return event

    def create_customer(
        self, profile: CustomerProfile, occurred_at: datetime | None = None
    ) -> None:
        """Record a signup and any board change it implies."""
        occurred_at = occurred_at or _now()
        self._record_profile(CustomerCreated, profile, occurred_at)
        for derived in self.board.decide(
            self.customer_id, profile.capabilities, occurred_at
        ):
            self._record_that(derived)

    def update_customer(
        self, profile: CustomerProfile, occurred_at: datetime | None = None
    ) -> None:
        """Record a profile edit and any board change it implies."""
        occurred_at = occurred_at or _now()
        self._record_profile(CustomerUpdated, profile, occurred_at)
        for derived in self.board.decide(
            self.customer_id, profile.capabilities, occurred_at
        ):
            self._record_that(derived)

    def import_customer(
        self, profile: CustomerProfile, occurred_at: datetime | None = None
    ) -> None:
        """Record an imported profile.

        Board state is taken over silently: no board event is derived.
        """
        self._record_profile(CustomerImported, profile, occurred_at or _now())

    def delete_customer(self, occurred_at: datetime | None = None) -> None:
        """Record an upstream deletion. Deleting twice records nothing."""
        if self.deleted:
            return
        self._record_that(
            CustomerDeleted(
                customer_id=self.customer_id, occurred_at=occurred_at or _now()
            )
        )

    def _observe_subscription(
        self,
        event_class: type[SubscriptionStatusEvent],
        subscription_id: int,
        status: str,
        occurred_at: datetime | None,
    ) -> None:
        occurred_at = occurred_at or _now()
        self._record_that(
            event_class(
                customer_id=self.customer_id,
                subscription_id=subscription_id,
                status=status,
                occurred_at=occurred_at,
            )
        )
        for derived in self.subscriptions.decide(
            self.customer_id, subscription_id, occurred_at
        ):
            self._record_that(derived)

    def create_subscription(
        self, subscription_id: int, status: str, occurred_at: datetime | None = None
    ) -> None:
        self._observe_subscription(
            SubscriptionCreated, subscription_id, status, occurred_at
        )

    def update_subscription(
        self, subscription_id: int, status: str, occurred_at: datetime | None = None
    ) -> None:
        self._observe_subscription(
            SubscriptionUpdated, subscription_id, status, occurred_at
        )

    def import_subscription(
        self, subscription_id: int, status: str, occurred_at: datetime | None = None
    ) -> None:
        self._observe_subscription(
            SubscriptionImported, subscription_id, status, occurred_at
        )

    def create_user_membership(
        self,
        membership_id: int,
        plan_id: int,
        status: str,
        occurred_at: datetime | None = None,
    ) -> None:
        self._record_that(
            UserMembershipCreated(
                customer_id=self.customer_id,
                membership_id=membership_id,
                plan_id=plan_id,
                status=status,
                occurred_at=occurred_at or _now(),
            )
        )

    def assign_waiver(
        self, waiver_id: str, occurred_at: datetime | None = None
    ) -> bool:
        """Link a waiver to this customer unless it already is.

        Returns:
            True if a WaiverAssignedToCustomer event was recorded
        """
        derived = self.waivers.decide(
            self.customer_id, waiver_id, occurred_at or _now()
        )
        for event in derived:
            self._record_that(event)
        return bool(derived)

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        """Events recorded since the last collection, oldest first."""
        return tuple(self._pending_events)

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear the events recorded since the last collection."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
