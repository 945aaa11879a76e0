"""Unit tests for SlackClient against an httpx mock transport."""

import json
from unittest.mock import Mock

import httpx
import pytest

from shared_kernel.integrations.exceptions import UnexpectedGatewayResponse
from shared_kernel.integrations.observability import GatewayProbe
from shared_kernel.integrations.slack import SlackClient


def _client(handler, **kwargs) -> SlackClient:
    return SlackClient(
        bot_token="xoxb-bot",
        admin_token="xoxp-admin",
        team_id="T1",
        probe=Mock(spec=GatewayProbe),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestPagination:
    @pytest.mark.asyncio
    async def test_list_users_follows_cursor(self):
        cursors = []

        def handler(request: httpx.Request) -> httpx.Response:
            cursor = request.url.params.get("cursor")
            cursors.append(cursor)
            assert request.url.params["limit"] == "200"
            if cursor is None:
                return httpx.Response(
                    200,
                    json={
                        "ok": True,
                        "members": [{"id": "U1"}],
                        "response_metadata": {"next_cursor": "abc"},
                    },
                )
            return httpx.Response(
                200,
                json={
                    "ok": True,
                    "members": [{"id": "U2"}],
                    "response_metadata": {"next_cursor": ""},
                },
            )

        client = _client(handler)

        users = await client.list_users()

        assert [user["id"] for user in users] == ["U1", "U2"]
        assert cursors == [None, "abc"]


class TestChannels:
    @pytest.mark.asyncio
    async def test_channel_id_is_returned_unchanged(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await _client(handler).channel_id("C01ABCDEF2") == "C01ABCDEF2"

    @pytest.mark.asyncio
    async def test_channel_name_is_resolved(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/conversations.list")
            return httpx.Response(
                200,
                json={
                    "ok": True,
                    "channels": [
                        {"id": "C0000000001", "name": "general"},
                        {"id": "C0000000002", "name": "board"},
                    ],
                },
            )

        assert await _client(handler).channel_id("#board") == "C0000000002"

    @pytest.mark.asyncio
    async def test_unknown_channel_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "channels": []})

        with pytest.raises(UnexpectedGatewayResponse, match="not found"):
            await _client(handler).channel_id("nowhere")

    @pytest.mark.asyncio
    async def test_kick_returns_error_payload_without_raising(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"channel": "C1", "user": "U1"}
            return httpx.Response(200, json={"ok": False, "error": "not_in_channel"})

        response = await _client(handler).kick_from_channel("U1", "C1")

        assert response == {"ok": False, "error": "not_in_channel"}


class TestAdminCalls:
    @pytest.mark.asyncio
    async def test_admin_calls_use_the_admin_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["Authorization"])
            return httpx.Response(200, json={"ok": True})

        await _client(handler).set_regular("U1")

        assert seen == ["Bearer xoxp-admin"]

    @pytest.mark.asyncio
    async def test_set_restricted_tolerates_existing_channel_members(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path.rsplit("/", 1)[-1])
            if request.url.path.endswith("/conversations.invite"):
                return httpx.Response(
                    200, json={"ok": False, "error": "already_in_channel"}
                )
            return httpx.Response(200, json={"ok": True})

        await _client(handler).set_restricted("U1", ["C1", "C2"])

        assert calls == [
            "admin.users.setRestricted",
            "conversations.invite",
            "conversations.invite",
        ]

    @pytest.mark.asyncio
    async def test_failed_checked_call_carries_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": False, "error": "invalid_auth"})

        with pytest.raises(UnexpectedGatewayResponse) as exc_info:
            await _client(handler).post_message("C1", "hi")

        assert exc_info.value.payload == {"ok": False, "error": "invalid_auth"}
        assert exc_info.value.gateway == "slack"


class TestUserGroups:
    @pytest.mark.asyncio
    async def test_set_members_joins_ids(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True})

        await _client(handler).set_user_group_members("S1", ["U1", "U2"])

        assert bodies == [{"usergroup": "S1", "users": "U1,U2"}]

    @pytest.mark.asyncio
    async def test_user_group_id_by_handle(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"ok": True, "usergroups": [{"id": "S1", "handle": "theboard"}]},
            )

        assert await _client(handler).user_group_id("theboard") == "S1"
