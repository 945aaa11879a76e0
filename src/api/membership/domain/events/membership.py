"""Derived membership domain events.

These are recorded by the membership aggregate when a primary fact
crosses a business threshold. Reactors subscribe to them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MembershipActivated:
    """A subscription became active from a pre-activation state."""

    customer_id: int
    occurred_at: datetime


@dataclass(frozen=True)
class MembershipDeactivated:
    """The customer no longer holds any active subscription."""

    customer_id: int
    occurred_at: datetime


@dataclass(frozen=True)
class CustomerBecameBoardMember:
    """The board capability was granted."""

    customer_id: int
    occurred_at: datetime


@dataclass(frozen=True)
class CustomerRemovedFromBoard:
    """The board capability was revoked."""

    customer_id: int
    occurred_at: datetime
