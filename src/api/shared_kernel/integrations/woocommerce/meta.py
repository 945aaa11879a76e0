"""Helpers for the ``meta_data`` list on WooCommerce customers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

CARD_NUMBER_META_KEY = "access_card_number"
SLACK_ID_META_KEY = "access_slack_id"
CAPABILITIES_META_KEY = "wp_capabilities"


def meta_value(meta_data: Iterable[dict[str, Any]] | None, key: str) -> Any:
    """Return the value of the first meta entry with ``key``, or None."""
    for entry in meta_data or ():
        if entry.get("key") == key:
            return entry.get("value")
    return None


def capabilities(meta_data: Iterable[dict[str, Any]] | None) -> tuple[str, ...]:
    """Return the capability names granted to a customer.

    WordPress stores capabilities as ``{"name": true}``; a list of names is
    accepted as well.
    """
    value = meta_value(meta_data, CAPABILITIES_META_KEY)
    if isinstance(value, dict):
        return tuple(sorted(name for name, granted in value.items() if granted))
    if isinstance(value, list):
        return tuple(sorted(str(name) for name in value))
    return ()
