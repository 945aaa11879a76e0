"""Ports (interfaces) for the membership bounded context.

Ports define the contracts for repositories without specifying
implementation details.
"""

from membership.ports.exceptions import (
    ChatAccountNotLinkedError,
    CustomerNotFoundError,
    UnsupportedEventError,
)
from membership.ports.repositories import (
    ICustomerLookup,
    ICustomerRepository,
    IMembershipRepository,
    IWaiverRepository,
)

__all__ = [
    "ICustomerLookup",
    "ICustomerRepository",
    "IMembershipRepository",
    "IWaiverRepository",
    "ChatAccountNotLinkedError",
    "CustomerNotFoundError",
    "UnsupportedEventError",
]
