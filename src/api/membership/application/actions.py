"""Actions: idempotent, independently retriable units of external work.

Reactors return these value objects; the ``ActionRunner`` executes them.
Actions address customers by their e-commerce id and resolve the current
email or chat id at run time, so a retried action always targets the
customer's latest details.
"""

from __future__ import annotations

from dataclasses import dataclass

from membership.domain.read_models import Customer


@dataclass(frozen=True)
class AddToDirectoryGroup:
    customer_id: int
    group: str


@dataclass(frozen=True)
class RemoveFromDirectoryGroup:
    customer_id: int
    group: str


@dataclass(frozen=True)
class RemoveFromAllDirectoryGroups:
    """Remove the customer from every group it belongs to, except ``keep``."""

    customer_id: int
    keep: tuple[str, ...] = ()


@dataclass(frozen=True)
class AddToChannel:
    customer_id: int
    channel: str


@dataclass(frozen=True)
class RemoveFromChannel:
    customer_id: int
    channel: str


@dataclass(frozen=True)
class AddToUserGroup:
    customer_id: int
    handle: str


@dataclass(frozen=True)
class RemoveFromUserGroup:
    customer_id: int
    handle: str


@dataclass(frozen=True)
class MakeRegularChatMember:
    """Promote the customer's chat account, or invite them as a full member."""

    customer_id: int


@dataclass(frozen=True)
class InviteIdCheckOnlyChatMember:
    """Give a customer awaiting an id check a restricted chat account."""

    customer_id: int


@dataclass(frozen=True)
class DemoteToRestrictedChatMember:
    customer_id: int


@dataclass(frozen=True)
class UpdateChatProfileMembership:
    """Write the customer's current membership into their chat profile."""

    customer_id: int


@dataclass(frozen=True)
class SendMessage:
    """Post a chat message.

    ``recipient`` is a Customer, a raw chat user or channel id
    (``U...``/``C...``), or a customer id given as int or numeric string.
    """

    recipient: Customer | int | str
    text: str


Action = (
    AddToDirectoryGroup
    | RemoveFromDirectoryGroup
    | RemoveFromAllDirectoryGroups
    | AddToChannel
    | RemoveFromChannel
    | AddToUserGroup
    | RemoveFromUserGroup
    | MakeRegularChatMember
    | InviteIdCheckOnlyChatMember
    | DemoteToRestrictedChatMember
    | UpdateChatProfileMembership
    | SendMessage
)
