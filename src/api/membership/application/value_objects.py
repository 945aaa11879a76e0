"""Application-level value objects for the membership context.

These are the typed facts the membership service accepts, built once from
WooCommerce payloads so that neither the service nor the aggregate ever
handles raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from membership.domain.value_objects import CustomerId, CustomerProfile
from shared_kernel.access_cards import parse_card_list
from shared_kernel.integrations.woocommerce import (
    CARD_NUMBER_META_KEY,
    SLACK_ID_META_KEY,
    capabilities,
    meta_value,
)


def _customer_id(value: Any) -> int:
    return CustomerId.from_string(str(value)).value


@dataclass(frozen=True)
class CustomerFact:
    """A customer record as reported by the e-commerce platform."""

    customer_id: int
    profile: CustomerProfile

    @classmethod
    def from_woocommerce(cls, payload: dict[str, Any]) -> CustomerFact:
        """Build a fact from a customer payload.

        Raises:
            ValueError: If the payload has no valid customer id
        """
        meta_data = payload.get("meta_data") or []
        card_numbers = meta_value(meta_data, CARD_NUMBER_META_KEY)
        slack_id = meta_value(meta_data, SLACK_ID_META_KEY)

        return cls(
            customer_id=_customer_id(payload.get("id")),
            profile=CustomerProfile(
                username=payload.get("username") or None,
                first_name=payload.get("first_name") or None,
                last_name=payload.get("last_name") or None,
                email=payload.get("email"),
                slack_id=slack_id or None,
                capabilities=capabilities(meta_data),
                card_numbers=parse_card_list(
                    card_numbers if isinstance(card_numbers, str) else None
                ),
            ),
        )


@dataclass(frozen=True)
class SubscriptionFact:
    """A subscription status observation."""

    customer_id: int
    subscription_id: int
    status: str

    @classmethod
    def from_woocommerce(cls, payload: dict[str, Any]) -> SubscriptionFact:
        """Build a fact from a subscription payload.

        Raises:
            ValueError: If the customer id, id or status is missing
        """
        status = payload.get("status")
        if not status:
            raise ValueError(f"Subscription {payload.get('id')} has no status")
        try:
            subscription_id = int(payload["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("Subscription payload has no valid id") from e

        return cls(
            customer_id=_customer_id(payload.get("customer_id")),
            subscription_id=subscription_id,
            status=str(status),
        )


@dataclass(frozen=True)
class UserMembershipFact:
    """A plan membership (equipment authorization and similar)."""

    customer_id: int
    membership_id: int
    plan_id: int
    status: str

    @classmethod
    def from_woocommerce(cls, payload: dict[str, Any]) -> UserMembershipFact:
        try:
            membership_id = int(payload["id"])
            plan_id = int(payload["plan_id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("User membership payload is missing id or plan_id") from e

        return cls(
            customer_id=_customer_id(payload.get("customer_id")),
            membership_id=membership_id,
            plan_id=plan_id,
            status=str(payload.get("status", "")),
        )
