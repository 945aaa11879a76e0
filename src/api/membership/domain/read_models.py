"""Read models projected from membership facts.

These are not sources of truth: the customer's ``member`` flag is a cached
projection of the aggregate's live membership check, and cards mirror
what the profile and the card system report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from membership.domain.value_objects import (
    BOARD_CAPABILITY,
    CustomerProfile,
    PersonIdentity,
    canonical_email,
)
from shared_kernel.access_cards import canonical_card_number


@dataclass
class Card:
    """A physical access card.

    ``ever_activated`` only ever goes from False to True.
    """

    number: str
    customer_id: int
    active: bool = False
    member_has_card: bool = True
    ever_activated: bool = False

    def __post_init__(self) -> None:
        self.number = canonical_card_number(self.number)

    def matches(self, number: str) -> bool:
        return self.number == canonical_card_number(number)

    def activate(self) -> None:
        self.active = True
        self.ever_activated = True

    def deactivate(self) -> None:
        self.active = False


@dataclass
class Customer:
    """A customer as last seen by the membership service."""

    woo_id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    slack_id: str | None = None
    member: bool = False
    capabilities: tuple[str, ...] = ()
    cards: list[Card] = field(default_factory=list)
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        self.email = canonical_email(self.email)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_board_member(self) -> bool:
        return BOARD_CAPABILITY in self.capabilities

    @property
    def identity(self) -> PersonIdentity | None:
        return PersonIdentity.from_parts(self.first_name, self.last_name, self.email)

    def apply_profile(self, profile: CustomerProfile) -> None:
        """Overwrite profile fields and reconcile the card list."""
        self.username = profile.username
        self.first_name = profile.first_name
        self.last_name = profile.last_name
        self.email = profile.email
        self.slack_id = profile.slack_id
        self.capabilities = profile.capabilities
        self.sync_cards(profile.card_numbers)

    def sync_cards(self, numbers: tuple[str, ...]) -> None:
        """Mirror the card numbers listed on the profile.

        Unseen numbers become new cards the member holds. Cards no longer
        listed are kept (their history matters) but flagged as no longer
        held by the member.
        """
        listed = {canonical_card_number(number) for number in numbers}

        for card in self.cards:
            card.member_has_card = card.number in listed

        known = {card.number for card in self.cards}
        for number in numbers:
            canonical = canonical_card_number(number)
            if canonical and canonical not in known:
                self.cards.append(Card(number=canonical, customer_id=self.woo_id))
                known.add(canonical)

    def card(self, number: str) -> Card | None:
        for card in self.cards:
            if card.matches(number):
                return card
        return None

    def soft_delete(self, when: datetime | None = None) -> None:
        if self.deleted_at is None:
            self.deleted_at = when or datetime.now(UTC)


@dataclass
class Waiver:
    """A signed (or otherwise) liability waiver."""

    waiver_id: str
    template_id: str
    template_version: str
    status: str
    first_name: str
    last_name: str
    email: str

    def __post_init__(self) -> None:
        self.email = canonical_email(self.email) or ""

    @property
    def is_accepted(self) -> bool:
        return self.status == "accepted"

    @property
    def identity(self) -> PersonIdentity | None:
        return PersonIdentity.from_parts(self.first_name, self.last_name, self.email)
