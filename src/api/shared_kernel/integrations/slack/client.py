"""Slack Web API client built on httpx."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

import httpx

from shared_kernel.integrations.exceptions import UnexpectedGatewayResponse
from shared_kernel.integrations.http import send
from shared_kernel.integrations.observability import (
    DefaultGatewayProbe,
    GatewayProbe,
)

_GATEWAY = "slack"


class SlackClient:
    """Async Slack client.

    Regular methods use the bot token. Workspace administration
    (``admin.users.*``) needs an org admin token and the team id.
    """

    _CHANNEL_ID_PATTERN = re.compile(r"^[CG][A-Z0-9]{8,}$")

    def __init__(
        self,
        bot_token: str,
        admin_token: str | None = None,
        team_id: str | None = None,
        base_url: str = "https://slack.com/api",
        probe: GatewayProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {bot_token}"},
            timeout=30.0,
            transport=transport,
        )
        self._admin_token = admin_token
        self._team_id = team_id
        self._probe = probe or DefaultGatewayProbe()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(
        self,
        method: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        admin: bool = False,
        check: bool = True,
    ) -> dict[str, Any]:
        headers = {}
        if admin and self._admin_token:
            headers["Authorization"] = f"Bearer {self._admin_token}"

        if body is None:
            response = await send(
                self._client,
                _GATEWAY,
                self._probe,
                "GET",
                f"/{method}",
                params=params,
                headers=headers,
            )
        else:
            response = await send(
                self._client,
                _GATEWAY,
                self._probe,
                "POST",
                f"/{method}",
                json=body,
                headers=headers,
            )

        payload = response.json()
        if check and not payload.get("ok", False):
            raise UnexpectedGatewayResponse(
                f"Slack {method} failed",
                payload=payload,
                status_code=response.status_code,
                gateway=_GATEWAY,
            )
        return payload

    async def _paginate(
        self, method: str, item_key: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        cursor = ""
        while True:
            page_params = {**(params or {}), "limit": 200}
            if cursor:
                page_params["cursor"] = cursor
            payload = await self._call(method, params=page_params)
            items.extend(payload.get(item_key, []))
            cursor = payload.get("response_metadata", {}).get("next_cursor", "")
            if not cursor:
                return items

    async def list_users(self) -> list[dict[str, Any]]:
        return await self._paginate("users.list", "members")

    async def channel_id(self, channel: str) -> str:
        if self._CHANNEL_ID_PATTERN.match(channel):
            return channel

        name = channel.lstrip("#")
        channels = await self._paginate(
            "conversations.list",
            "channels",
            {"types": "public_channel,private_channel", "exclude_archived": "true"},
        )
        for candidate in channels:
            if candidate.get("name") == name:
                return candidate["id"]

        raise UnexpectedGatewayResponse(
            f"Slack channel {channel} not found", gateway=_GATEWAY
        )

    async def kick_from_channel(self, user_id: str, channel_id: str) -> dict[str, Any]:
        return await self._call(
            "conversations.kick",
            body={"channel": channel_id, "user": user_id},
            check=False,
        )

    async def join_channel(self, channel_id: str) -> dict[str, Any]:
        return await self._call(
            "conversations.join", body={"channel": channel_id}, check=False
        )

    async def invite_to_channel(self, user_id: str, channel_id: str) -> dict[str, Any]:
        return await self._call(
            "conversations.invite",
            body={"channel": channel_id, "users": user_id},
            check=False,
        )

    async def user_group_id(self, handle: str) -> str:
        payload = await self._call("usergroups.list")
        for group in payload.get("usergroups", []):
            if group.get("handle") == handle:
                return group["id"]

        raise UnexpectedGatewayResponse(
            f"Slack user group {handle} not found", gateway=_GATEWAY
        )

    async def user_group_members(self, group_id: str) -> list[str]:
        payload = await self._call(
            "usergroups.users.list", params={"usergroup": group_id}
        )
        return list(payload.get("users", []))

    async def set_user_group_members(
        self, group_id: str, user_ids: Sequence[str]
    ) -> None:
        await self._call(
            "usergroups.users.update",
            body={"usergroup": group_id, "users": ",".join(user_ids)},
        )

    async def post_message(self, recipient: str, text: str) -> None:
        await self._call("chat.postMessage", body={"channel": recipient, "text": text})

    async def set_profile_field(self, user_id: str, field_id: str, value: str) -> None:
        await self._call(
            "users.profile.set",
            body={
                "user": user_id,
                "profile": {"fields": {field_id: {"value": value, "alt": ""}}},
            },
            admin=True,
        )

    async def set_regular(self, user_id: str) -> None:
        await self._call(
            "admin.users.setRegular",
            body={"team_id": self._team_id, "user_id": user_id},
            admin=True,
        )

    async def set_restricted(self, user_id: str, channel_ids: Sequence[str]) -> None:
        await self._call(
            "admin.users.setRestricted",
            body={"team_id": self._team_id, "user_id": user_id},
            admin=True,
        )
        for channel_id in channel_ids:
            response = await self.invite_to_channel(user_id, channel_id)
            if not response.get("ok") and response.get("error") != "already_in_channel":
                raise UnexpectedGatewayResponse(
                    "Slack conversations.invite failed",
                    payload=response,
                    gateway=_GATEWAY,
                )

    async def invite_user(
        self, email: str, channel_ids: Sequence[str], restricted: bool
    ) -> dict[str, Any]:
        return await self._call(
            "admin.users.invite",
            body={
                "team_id": self._team_id,
                "email": email,
                "channel_ids": ",".join(channel_ids),
                "is_restricted": restricted,
            },
            admin=True,
            check=False,
        )
