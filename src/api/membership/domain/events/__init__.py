"""Domain events for the membership bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects with explicit fields per event kind,
encoded and decoded once at the event store boundary.
"""

from membership.domain.events.customer import (
    CustomerCreated,
    CustomerDeleted,
    CustomerImported,
    CustomerProfileEvent,
    CustomerUpdated,
)
from membership.domain.events.membership import (
    CustomerBecameBoardMember,
    CustomerRemovedFromBoard,
    MembershipActivated,
    MembershipDeactivated,
)
from membership.domain.events.subscription import (
    SubscriptionCreated,
    SubscriptionImported,
    SubscriptionStatusEvent,
    SubscriptionUpdated,
    UserMembershipCreated,
)
from membership.domain.events.waiver import WaiverAccepted, WaiverAssignedToCustomer

# Type alias for all domain events in the membership context
DomainEvent = (
    CustomerCreated
    | CustomerUpdated
    | CustomerImported
    | CustomerDeleted
    | SubscriptionCreated
    | SubscriptionUpdated
    | SubscriptionImported
    | UserMembershipCreated
    | WaiverAccepted
    | WaiverAssignedToCustomer
    | MembershipActivated
    | MembershipDeactivated
    | CustomerBecameBoardMember
    | CustomerRemovedFromBoard
)

__all__ = [
    # Customer events
    "CustomerCreated",
    "CustomerDeleted",
    "CustomerImported",
    "CustomerProfileEvent",
    "CustomerUpdated",
    # Subscription events
    "SubscriptionCreated",
    "SubscriptionImported",
    "SubscriptionStatusEvent",
    "SubscriptionUpdated",
    "UserMembershipCreated",
    # Waiver events
    "WaiverAccepted",
    "WaiverAssignedToCustomer",
    # Derived events
    "CustomerBecameBoardMember",
    "CustomerRemovedFromBoard",
    "MembershipActivated",
    "MembershipDeactivated",
    # Type alias
    "DomainEvent",
]
