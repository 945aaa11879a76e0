"""Google Admin SDK directory client built on httpx."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from shared_kernel.integrations.google.protocols import ProgressCallback
from shared_kernel.integrations.http import send
from shared_kernel.integrations.observability import (
    DefaultGatewayProbe,
    GatewayProbe,
)

_GATEWAY = "google"


class GoogleDirectoryClient:
    """Async client for the directory groups API.

    The access token is expected to be minted out of band for a service
    account with domain-wide delegation.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://admin.googleapis.com/admin/directory/v1",
        probe: GatewayProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=30.0,
            transport=transport,
        )
        self._probe = probe or DefaultGatewayProbe()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _paginate(
        self,
        path: str,
        item_key: str,
        params: dict[str, Any],
        progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Follow ``nextPageToken`` until the listing is exhausted.

        A page without ``item_key`` is an empty page, not an error. After
        each page the progress callback receives the number of pages
        fetched and the number expected so far: one more than fetched
        while a continuation token is present.
        """
        items: list[dict[str, Any]] = []
        page_token: str | None = None
        steps_done = 0

        while True:
            page_params = dict(params)
            if page_token is not None:
                page_params["pageToken"] = page_token

            response = await send(
                self._client, _GATEWAY, self._probe, "GET", path, params=page_params
            )
            payload = response.json()
            items.extend(payload.get(item_key, []))

            page_token = payload.get("nextPageToken")
            steps_done += 1
            steps_estimated = steps_done if page_token is None else steps_done + 1
            self._probe.page_fetched(_GATEWAY, path, steps_done, steps_estimated)
            if progress is not None:
                progress(steps_done, steps_estimated)

            if page_token is None:
                return items

    async def groups_for_domain(
        self, domain: str, progress: ProgressCallback | None = None
    ) -> list[str]:
        groups = await self._paginate(
            "/groups", "groups", {"domain": domain}, progress
        )
        return [group["email"].lower() for group in groups]

    async def groups_for_member(self, email: str) -> list[str]:
        groups = await self._paginate("/groups", "groups", {"userKey": email})
        return [group["email"].lower() for group in groups]

    async def members_of(
        self, group: str, progress: ProgressCallback | None = None
    ) -> list[str]:
        members = await self._paginate(
            f"/groups/{quote(group)}/members", "members", {}, progress
        )
        return [member["email"].lower() for member in members if "email" in member]

    async def has_member(self, group: str, email: str) -> bool:
        response = await send(
            self._client,
            _GATEWAY,
            self._probe,
            "GET",
            f"/groups/{quote(group)}/hasMember/{quote(email)}",
            allow_status=frozenset({404}),
        )
        if response.status_code == 404:
            return False
        return bool(response.json().get("isMember", False))

    async def add_member(self, group: str, email: str) -> bool:
        response = await send(
            self._client,
            _GATEWAY,
            self._probe,
            "POST",
            f"/groups/{quote(group)}/members",
            json={"email": email, "role": "MEMBER"},
            allow_status=frozenset({409}),
        )
        return response.status_code != 409

    async def remove_member(self, group: str, email: str) -> bool:
        response = await send(
            self._client,
            _GATEWAY,
            self._probe,
            "DELETE",
            f"/groups/{quote(group)}/members/{quote(email)}",
            allow_status=frozenset({404}),
        )
        return response.status_code != 404
