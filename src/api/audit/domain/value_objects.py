"""Value objects for the audit domain.

Everything here is a snapshot of one source as read during a single audit
run. Nothing is persisted between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from shared_kernel.access_cards import canonical_card_number


class IssueCategory(StrEnum):
    """Report categories, in the order they are reported."""

    CARD = "Issue with a card"
    CHAT_ACCOUNT = "Issue with a Slack account"
    DIRECTORY_GROUPS = "Issue with google groups"


@dataclass(frozen=True)
class MemberRecord:
    """One entry of the unified members view.

    Attributes:
        id: Source identifier (e-commerce id or legacy id)
        first_name: Given name, if known
        last_name: Family name, if known
        email: Lower-cased email, if known
        is_member: Freshly recomputed membership for this run
        cards: Canonical card numbers
        slack_id: Linked chat account id, if any
    """

    id: int | str
    first_name: str | None
    last_name: str | None
    email: str | None
    is_member: bool
    cards: tuple[str, ...] = ()
    slack_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def holds_card(self, number: str) -> bool:
        return canonical_card_number(number) in self.cards


@dataclass(frozen=True)
class LegacyMember:
    """A manually tracked member from before the e-commerce platform."""

    id: str
    first_name: str | None
    last_name: str | None
    email: str | None
    active: bool
    card: str | None = None
    slack_id: str | None = None


@dataclass(frozen=True)
class CardHolder:
    """An active card as reported by the access-card system."""

    card_num: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class ChatAccount:
    """A chat platform account."""

    id: str
    name: str
    is_bot: bool = False
    deleted: bool = False
    is_restricted: bool = False
    is_ultra_restricted: bool = False
    is_invited_user: bool = False

    @property
    def is_full(self) -> bool:
        """Not deleted, not restricted, not ultra restricted."""
        return not (self.deleted or self.is_restricted or self.is_ultra_restricted)

    @classmethod
    def from_api(cls, user: dict[str, Any]) -> ChatAccount:
        """Build from a ``users.list`` entry; absent flags count as false."""
        return cls(
            id=user["id"],
            name=user.get("name", ""),
            is_bot=bool(user.get("is_bot", False)),
            deleted=bool(user.get("deleted", False)),
            is_restricted=bool(user.get("is_restricted", False)),
            is_ultra_restricted=bool(user.get("is_ultra_restricted", False)),
            is_invited_user=bool(user.get("is_invited_user", False)),
        )
