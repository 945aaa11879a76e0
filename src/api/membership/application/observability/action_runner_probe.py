"""Protocol for action runner observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ActionRunnerProbe(Protocol):
    """Domain probe for side-effecting actions."""

    def action_completed(self, action: str, customer_id: int | None) -> None:
        """Record that an action reached its target state."""
        ...

    def action_already_satisfied(self, action: str, customer_id: int | None) -> None:
        """Record that the target state already held, so nothing was changed."""
        ...

    def action_skipped(self, action: str, customer_id: int | None, reason: str) -> None:
        """Record that an action had nothing to act on."""
        ...

    def channel_joined_for_retry(self, channel_id: str, operation: str) -> None:
        """Record that the bot joined a channel before retrying an operation."""
        ...

    def with_context(self, context: ObservationContext) -> ActionRunnerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultActionRunnerProbe:
    """Default implementation of ActionRunnerProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultActionRunnerProbe:
        return DefaultActionRunnerProbe(logger=self._logger, context=context)

    def action_completed(self, action: str, customer_id: int | None) -> None:
        self._logger.info(
            "action_completed",
            action=action,
            customer_id=customer_id,
            **self._get_context_kwargs(),
        )

    def action_already_satisfied(self, action: str, customer_id: int | None) -> None:
        self._logger.debug(
            "action_already_satisfied",
            action=action,
            customer_id=customer_id,
            **self._get_context_kwargs(),
        )

    def action_skipped(self, action: str, customer_id: int | None, reason: str) -> None:
        self._logger.info(
            "action_skipped",
            action=action,
            customer_id=customer_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def channel_joined_for_retry(self, channel_id: str, operation: str) -> None:
        self._logger.info(
            "channel_joined_for_retry",
            channel_id=channel_id,
            operation=operation,
            **self._get_context_kwargs(),
        )
