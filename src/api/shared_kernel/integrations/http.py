"""Shared request helper for the httpx based gateway clients."""

from __future__ import annotations

from typing import Any

import httpx

from shared_kernel.integrations.exceptions import (
    TransientGatewayError,
    UnexpectedGatewayResponse,
)
from shared_kernel.integrations.observability import GatewayProbe

_RETRYABLE_STATUS = frozenset({408, 429})


async def send(
    client: httpx.AsyncClient,
    gateway: str,
    probe: GatewayProbe,
    method: str,
    url: str,
    *,
    allow_status: frozenset[int] = frozenset(),
    **kwargs: Any,
) -> httpx.Response:
    """Send a request and map failures onto the gateway exceptions.

    Args:
        client: The httpx client carrying base URL and credentials
        gateway: Gateway name used in errors and logs
        probe: Probe receiving failure notifications
        method: HTTP method
        url: Path relative to the client's base URL
        allow_status: Non-2xx status codes the caller handles itself
        **kwargs: Passed through to ``client.request``

    Returns:
        The response, either 2xx or one of ``allow_status``

    Raises:
        TransientGatewayError: On network errors, throttling and 5xx
        UnexpectedGatewayResponse: On any other non-2xx status
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        probe.request_failed(gateway=gateway, operation=url, reason=repr(e))
        raise TransientGatewayError(
            f"{gateway} request to {url} failed: {e}", gateway=gateway
        ) from e

    if response.is_success or response.status_code in allow_status:
        return response

    probe.request_failed(
        gateway=gateway,
        operation=url,
        reason="HTTP error",
        status_code=response.status_code,
    )

    if response.status_code >= 500 or response.status_code in _RETRYABLE_STATUS:
        raise TransientGatewayError(
            f"{gateway} returned HTTP {response.status_code} for {url}",
            gateway=gateway,
        )

    raise UnexpectedGatewayResponse(
        f"{gateway} returned HTTP {response.status_code} for {url}",
        payload=_payload(response),
        status_code=response.status_code,
        gateway=gateway,
    )


def _payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
