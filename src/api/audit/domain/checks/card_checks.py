"""Card reconciliation between the access-card system and the members view."""

from __future__ import annotations

from collections.abc import Sequence

from audit.domain.value_objects import CardHolder, MemberRecord
from shared_kernel.access_cards import canonical_card_number


def unknown_active_cards(
    card_holders: Sequence[CardHolder], members: Sequence[MemberRecord]
) -> list[str]:
    """Check every active card against the members holding it."""
    issues = []
    for holder in card_holders:
        with_card = [member for member in members if member.holds_card(holder.card_num)]
        prefix = f"{holder.full_name} has the active card ({holder.card_num})"

        if not with_card:
            issues.append(
                f"{prefix} but I have no membership record of them with that card."
            )
            continue

        if len(with_card) > 1:
            issues.append(f"{prefix} but is connected to multiple accounts.")
            continue

        member = with_card[0]
        if (
            holder.first_name != member.first_name
            or holder.last_name != member.last_name
        ):
            issues.append(
                f"{prefix} but is listed as {member.full_name} in our records."
            )

        if not member.is_member:
            issues.append(f"{prefix} but is not currently a member.")

    return issues


def inactive_member_cards(
    card_holders: Sequence[CardHolder], members: Sequence[MemberRecord]
) -> list[str]:
    """Check that every card of every named, active member is active."""
    active_cards = {canonical_card_number(holder.card_num) for holder in card_holders}

    issues = []
    for member in members:
        if member.first_name is None or member.last_name is None:
            continue
        if not member.is_member:
            continue

        for card in member.cards:
            if card not in active_cards:
                issues.append(
                    f"{member.full_name} has the card {card} "
                    "but it doesn't appear to be active"
                )
    return issues
