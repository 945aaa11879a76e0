"""Subscription and membership-plan domain events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SubscriptionStatusEvent:
    """A status observation for one subscription.

    Attributes:
        customer_id: Owner of the subscription
        subscription_id: E-commerce subscription id
        status: Status string as reported by the platform
        occurred_at: When the event occurred (UTC)
    """

    customer_id: int
    subscription_id: int
    status: str
    occurred_at: datetime


@dataclass(frozen=True)
class SubscriptionCreated(SubscriptionStatusEvent):
    """Event raised when a subscription is created."""


@dataclass(frozen=True)
class SubscriptionUpdated(SubscriptionStatusEvent):
    """Event raised when a subscription changes (usually its status)."""


@dataclass(frozen=True)
class SubscriptionImported(SubscriptionStatusEvent):
    """Event raised when a subscription is pulled in by a bulk import."""


@dataclass(frozen=True)
class UserMembershipCreated:
    """Event raised when a membership plan is granted to a customer.

    Plans model equipment authorizations (3D printer, laser cutter).

    Attributes:
        customer_id: Customer the plan was granted to
        membership_id: E-commerce user membership id
        plan_id: Membership plan id
        status: Membership status as reported by the platform
        occurred_at: When the event occurred (UTC)
    """

    customer_id: int
    membership_id: int
    plan_id: int
    status: str
    occurred_at: datetime
