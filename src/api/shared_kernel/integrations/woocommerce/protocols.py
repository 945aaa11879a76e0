"""Protocol for the e-commerce platform holding customers and subscriptions."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CommerceSource(Protocol):
    """Customer and subscription listings."""

    async def list_customers(self) -> list[dict[str, Any]]:
        """List every customer with its ``meta_data``."""
        ...

    async def list_subscriptions(self) -> list[dict[str, Any]]:
        """List every subscription with ``customer_id`` and ``status``."""
        ...
