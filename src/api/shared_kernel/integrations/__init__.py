"""Thin clients for the external systems membership is reconciled against.

Each integration exposes a protocol (what the bounded contexts depend on)
and an httpx implementation. All of them report failures through the
exceptions in :mod:`shared_kernel.integrations.exceptions`.
"""

from shared_kernel.integrations.exceptions import (
    GatewayError,
    TransientGatewayError,
    UnexpectedGatewayResponse,
)

__all__ = [
    "GatewayError",
    "TransientGatewayError",
    "UnexpectedGatewayResponse",
]
