"""Unit tests for the FastAPI application wiring and lifespan."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from asgi_lifespan import LifespanManager
from fastapi import status
from fastapi.testclient import TestClient


@pytest.fixture
def lifespan_patches():
    """Replace everything the lifespan touches outside the process."""
    clients = [AsyncMock(), AsyncMock(), AsyncMock()]
    probe = MagicMock()
    worker = AsyncMock()
    with (
        patch("main.configure_logging"),
        patch("main.DefaultStartupProbe", return_value=probe),
        patch("main.get_database_settings") as database_settings,
        patch("main.get_outbox_settings") as outbox_settings,
        patch("main.ensure_schema", new_callable=AsyncMock) as ensure_schema,
        patch(
            "main.close_database_connections", new_callable=AsyncMock
        ) as close_connections,
        patch("main.build_reactor_worker", return_value=worker),
        patch("main.get_chat_platform", return_value=clients[0]),
        patch("main.get_directory_service", return_value=clients[1]),
        patch("main.get_commerce_source", return_value=clients[2]),
    ):
        database_settings.return_value.create_schema = False
        outbox_settings.return_value.worker_enabled = False
        yield {
            "clients": clients,
            "probe": probe,
            "worker": worker,
            "database_settings": database_settings.return_value,
            "outbox_settings": outbox_settings.return_value,
            "ensure_schema": ensure_schema,
            "close_connections": close_connections,
        }


class TestRoutes:
    def test_health(self):
        from main import app

        response = TestClient(app).get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}

    def test_both_contexts_are_mounted(self):
        from main import app

        paths = {getattr(route, "path", None) for route in app.routes}

        assert {
            "/webhooks/woocommerce",
            "/webhooks/waivers",
            "/webhooks/cards",
            "/imports/woocommerce",
            "/audit/issues",
            "/audit/card-holders",
        } <= paths


class TestLifespan:
    @pytest.mark.asyncio
    async def test_worker_disabled(self, lifespan_patches):
        from main import app

        async with LifespanManager(app):
            pass

        lifespan_patches["probe"].reactor_worker_disabled.assert_called_once()
        lifespan_patches["worker"].start.assert_not_awaited()
        lifespan_patches["ensure_schema"].assert_not_awaited()
        for client in lifespan_patches["clients"]:
            client.aclose.assert_awaited_once()
        lifespan_patches["close_connections"].assert_awaited_once()
        lifespan_patches["probe"].application_stopped.assert_called_once()

    @pytest.mark.asyncio
    async def test_worker_and_schema_enabled(self, lifespan_patches):
        from main import app

        lifespan_patches["outbox_settings"].worker_enabled = True
        lifespan_patches["database_settings"].create_schema = True

        async with LifespanManager(app):
            lifespan_patches["worker"].start.assert_awaited_once()

        lifespan_patches["ensure_schema"].assert_awaited_once()
        lifespan_patches["worker"].stop.assert_awaited_once()
