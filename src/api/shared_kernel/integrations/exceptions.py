"""Exceptions for external gateway calls."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for external gateway errors."""

    def __init__(self, message: str, gateway: str | None = None) -> None:
        super().__init__(message)
        self.gateway = gateway


class TransientGatewayError(GatewayError):
    """Raised on network failures, throttling and 5xx responses.

    The reactor worker retries the whole outbox entry when this surfaces.
    """

    pass


class UnexpectedGatewayResponse(GatewayError):
    """Raised when a gateway answers with a payload we cannot act on.

    The full payload is attached for operator diagnosis.
    """

    def __init__(
        self,
        message: str,
        payload: Any = None,
        status_code: int | None = None,
        gateway: str | None = None,
    ) -> None:
        super().__init__(message, gateway=gateway)
        self.payload = payload
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.payload is None:
            return base
        return f"{base}: {self.payload!r}"
