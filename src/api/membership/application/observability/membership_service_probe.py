"""Protocol for membership service observability.

Defines the interface for domain probes that capture application-level
domain events while external facts are recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipServiceProbe(Protocol):
    """Domain probe for membership service operations."""

    def fact_recorded(
        self, fact: str, customer_id: int, event_types: list[str], version: int
    ) -> None:
        """Record that a fact was handled and its events were stored."""
        ...

    def fact_recording_failed(self, fact: str, customer_id: int, error: str) -> None:
        """Record that handling a fact failed and nothing was stored."""
        ...

    def membership_activated_recorded(self, customer_id: int) -> None:
        """Record that a fact crossed the activation threshold."""
        ...

    def membership_deactivated_recorded(self, customer_id: int) -> None:
        """Record that a fact left the customer without an active subscription."""
        ...

    def waiver_assigned(self, waiver_id: str, customer_id: int) -> None:
        """Record that a waiver was linked to a customer."""
        ...

    def waiver_ignored(self, waiver_id: str, status: str) -> None:
        """Record that a waiver was not accepted and therefore not stored."""
        ...

    def waiver_already_recorded(self, waiver_id: str) -> None:
        """Record that a redelivered waiver was seen before."""
        ...

    def card_access_changed(self, number: str, active: bool, customers: int) -> None:
        """Record that the card system reported a card state."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMembershipServiceProbe:
    """Default implementation of MembershipServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipServiceProbe(logger=self._logger, context=context)

    def fact_recorded(
        self, fact: str, customer_id: int, event_types: list[str], version: int
    ) -> None:
        self._logger.info(
            "membership_fact_recorded",
            fact=fact,
            customer_id=customer_id,
            event_types=event_types,
            version=version,
            **self._get_context_kwargs(),
        )

    def fact_recording_failed(self, fact: str, customer_id: int, error: str) -> None:
        self._logger.error(
            "membership_fact_recording_failed",
            fact=fact,
            customer_id=customer_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def membership_activated_recorded(self, customer_id: int) -> None:
        self._logger.info(
            "membership_activated_recorded",
            customer_id=customer_id,
            **self._get_context_kwargs(),
        )

    def membership_deactivated_recorded(self, customer_id: int) -> None:
        self._logger.info(
            "membership_deactivated_recorded",
            customer_id=customer_id,
            **self._get_context_kwargs(),
        )

    def waiver_assigned(self, waiver_id: str, customer_id: int) -> None:
        self._logger.info(
            "waiver_assigned",
            waiver_id=waiver_id,
            customer_id=customer_id,
            **self._get_context_kwargs(),
        )

    def waiver_ignored(self, waiver_id: str, status: str) -> None:
        self._logger.info(
            "waiver_ignored",
            waiver_id=waiver_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def waiver_already_recorded(self, waiver_id: str) -> None:
        self._logger.debug(
            "waiver_already_recorded",
            waiver_id=waiver_id,
            **self._get_context_kwargs(),
        )

    def card_access_changed(self, number: str, active: bool, customers: int) -> None:
        self._logger.info(
            "card_access_changed",
            number=number,
            active=active,
            customers=customers,
            **self._get_context_kwargs(),
        )
