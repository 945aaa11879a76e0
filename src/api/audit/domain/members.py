"""Builds the unified members view the checks run against."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from audit.domain.value_objects import LegacyMember, MemberRecord
from shared_kernel.access_cards import canonical_card_number, parse_card_list
from shared_kernel.integrations.woocommerce import (
    CARD_NUMBER_META_KEY,
    SLACK_ID_META_KEY,
    meta_value,
)

ACTIVE_STATUS = "active"


def _lower(email: str | None) -> str | None:
    return None if email is None else email.lower()


def build_members(
    customers: Iterable[dict[str, Any]],
    subscriptions: Iterable[dict[str, Any]],
    legacy_members: Iterable[LegacyMember] = (),
) -> list[MemberRecord]:
    """Merge e-commerce customers with legacy members.

    A customer is a member when at least one of their subscriptions is
    active right now; no cached flag is trusted.
    """
    active_customer_ids = {
        subscription.get("customer_id")
        for subscription in subscriptions
        if subscription.get("status") == ACTIVE_STATUS
    }

    members = []
    for customer in customers:
        meta_data = customer.get("meta_data") or []
        card_string = meta_value(meta_data, CARD_NUMBER_META_KEY)
        if not isinstance(card_string, str):
            card_string = None
        members.append(
            MemberRecord(
                id=customer["id"],
                first_name=customer.get("first_name"),
                last_name=customer.get("last_name"),
                email=_lower(customer.get("email")),
                is_member=customer["id"] in active_customer_ids,
                cards=parse_card_list(card_string),
                slack_id=meta_value(meta_data, SLACK_ID_META_KEY) or None,
            )
        )

    for legacy in legacy_members:
        card = canonical_card_number(legacy.card) if legacy.card else ""
        members.append(
            MemberRecord(
                id=legacy.id,
                first_name=legacy.first_name,
                last_name=legacy.last_name,
                email=_lower(legacy.email),
                is_member=legacy.active,
                cards=(card,) if card else (),
                slack_id=legacy.slack_id,
            )
        )

    return members
