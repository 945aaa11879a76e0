"""Value objects for the membership domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class CustomerId:
    """Identifier of a customer in the e-commerce platform.

    The e-commerce id is the identity anchor for every other system, and
    the membership event stream of a customer is keyed by it.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError(f"Invalid CustomerId: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> CustomerId:
        """Create CustomerId from its decimal string form.

        Raises:
            ValueError: If value is not a positive integer
        """
        try:
            return cls(value=int(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid CustomerId: {value}") from e


class SubscriptionStatus(StrEnum):
    """Subscription statuses the membership rules care about.

    The e-commerce platform reports other statuses too (pending, on-hold,
    expired); those are carried as plain strings and never cross a
    membership threshold.
    """

    NEED_ID_CHECK = "need-id-check"
    ID_WAS_CHECKED = "id-was-checked"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    SUSPENDED_PAYMENT = "suspended-payment"
    SUSPENDED_MANUAL = "suspended-manual"


# Pre-activation states: manual identity verification pending or done
IDENTITY_CHECK_STATUSES: frozenset[str] = frozenset(
    {SubscriptionStatus.NEED_ID_CHECK, SubscriptionStatus.ID_WAS_CHECKED}
)

INACTIVE_STATUSES: frozenset[str] = frozenset(
    {
        SubscriptionStatus.CANCELLED,
        SubscriptionStatus.SUSPENDED_PAYMENT,
        SubscriptionStatus.SUSPENDED_MANUAL,
    }
)

BOARD_CAPABILITY = "denhac_board_member"


def canonical_email(email: str | None) -> str | None:
    """Lower-case and trim an email; blank becomes None."""
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


@dataclass(frozen=True)
class PersonIdentity:
    """The (first name, last name, email) triple used to link waivers.

    Names compare exactly; the email is kept in canonical case so the
    comparison is exact-string safe across systems.
    """

    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_parts(
        cls,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
    ) -> PersonIdentity | None:
        """Build an identity, or None when any part is missing."""
        email = canonical_email(email)
        if not first_name or not last_name or email is None:
            return None
        return cls(first_name=first_name, last_name=last_name, email=email)


@dataclass(frozen=True)
class CustomerProfile:
    """A customer's profile as last reported by the e-commerce platform.

    Attributes:
        username: Login name, if any
        first_name: Given name
        last_name: Family name
        email: Email in canonical case
        slack_id: Linked chat account id, if any
        capabilities: Capability names granted to the customer
        card_numbers: Canonical access card numbers
    """

    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    slack_id: str | None = None
    capabilities: tuple[str, ...] = ()
    card_numbers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", canonical_email(self.email))

    @property
    def identity(self) -> PersonIdentity | None:
        return PersonIdentity.from_parts(self.first_name, self.last_name, self.email)
