"""WooCommerce REST API client built on httpx."""

from __future__ import annotations

from typing import Any

import httpx

from shared_kernel.integrations.http import send
from shared_kernel.integrations.observability import (
    DefaultGatewayProbe,
    GatewayProbe,
)

_GATEWAY = "woocommerce"


class WooCommerceClient:
    """Async client for the ``wc/v3`` endpoints.

    Listings are paginated by page number; a page shorter than
    ``per_page`` is the last one.
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        per_page: int = 100,
        probe: GatewayProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/wp-json/wc/v3",
            auth=(consumer_key, consumer_secret),
            timeout=60.0,
            transport=transport,
        )
        self._per_page = per_page
        self._probe = probe or DefaultGatewayProbe()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _paginate(self, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            response = await send(
                self._client,
                _GATEWAY,
                self._probe,
                "GET",
                path,
                params={"page": page, "per_page": self._per_page},
            )
            batch = response.json()
            items.extend(batch)
            last_page = len(batch) < self._per_page
            self._probe.page_fetched(
                _GATEWAY, path, page, page if last_page else page + 1
            )
            if last_page:
                return items
            page += 1

    async def list_customers(self) -> list[dict[str, Any]]:
        return await self._paginate("/customers")

    async def list_subscriptions(self) -> list[dict[str, Any]]:
        return await self._paginate("/subscriptions")
