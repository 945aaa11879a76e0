"""Unit tests for WooCommerceClient against an httpx mock transport."""

from unittest.mock import Mock

import httpx
import pytest

from shared_kernel.integrations.observability import GatewayProbe
from shared_kernel.integrations.woocommerce import WooCommerceClient


def _client(handler, per_page=2) -> WooCommerceClient:
    return WooCommerceClient(
        base_url="https://shop.example/",
        consumer_key="ck",
        consumer_secret="cs",
        per_page=per_page,
        probe=Mock(spec=GatewayProbe),
        transport=httpx.MockTransport(handler),
    )


class TestPagination:
    @pytest.mark.asyncio
    async def test_stops_at_the_first_short_page(self):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/wp-json/wc/v3/customers"
            page = int(request.url.params["page"])
            requested.append(page)
            pages = {1: [{"id": 1}, {"id": 2}], 2: [{"id": 3}]}
            return httpx.Response(200, json=pages[page])

        customers = await _client(handler).list_customers()

        assert [customer["id"] for customer in customers] == [1, 2, 3]
        assert requested == [1, 2]

    @pytest.mark.asyncio
    async def test_full_last_page_needs_an_empty_follow_up(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params["page"] == "1":
                return httpx.Response(200, json=[{"id": 10}, {"id": 11}])
            return httpx.Response(200, json=[])

        subscriptions = await _client(handler).list_subscriptions()

        assert len(subscriptions) == 2

    @pytest.mark.asyncio
    async def test_uses_basic_auth(self):
        headers = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers["Authorization"])
            return httpx.Response(200, json=[])

        await _client(handler).list_customers()

        assert headers[0].startswith("Basic ")
