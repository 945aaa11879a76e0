"""Domain probe for external gateway calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GatewayProbe(Protocol):
    """Domain probe for calls made to Slack, Google and WooCommerce."""

    def request_failed(
        self,
        gateway: str,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Record that a gateway request failed."""
        ...

    def page_fetched(
        self,
        gateway: str,
        operation: str,
        steps_done: int,
        steps_estimated: int,
    ) -> None:
        """Record that one page of a paginated listing was fetched."""
        ...

    def with_context(self, context: ObservationContext) -> GatewayProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGatewayProbe:
    """Default implementation of GatewayProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultGatewayProbe:
        """Create a new probe with observation context bound."""
        return DefaultGatewayProbe(logger=self._logger, context=context)

    def request_failed(
        self,
        gateway: str,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Record that a gateway request failed."""
        self._logger.warning(
            "gateway_request_failed",
            gateway=gateway,
            operation=operation,
            reason=reason,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def page_fetched(
        self,
        gateway: str,
        operation: str,
        steps_done: int,
        steps_estimated: int,
    ) -> None:
        """Record that one page of a paginated listing was fetched."""
        self._logger.debug(
            "gateway_page_fetched",
            gateway=gateway,
            operation=operation,
            steps_done=steps_done,
            steps_estimated=steps_estimated,
            **self._get_context_kwargs(),
        )
