"""Protocol for bulk import observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ImportServiceProbe(Protocol):
    """Domain probe for e-commerce imports."""

    def import_started(self) -> None:
        ...

    def record_skipped(self, kind: str, record_id: Any, reason: str) -> None:
        ...

    def import_completed(self, customers: int, subscriptions: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> ImportServiceProbe:
        ...


class DefaultImportServiceProbe:
    """Default implementation of ImportServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultImportServiceProbe:
        return DefaultImportServiceProbe(logger=self._logger, context=context)

    def import_started(self) -> None:
        self._logger.info("woocommerce_import_started", **self._get_context_kwargs())

    def record_skipped(self, kind: str, record_id: Any, reason: str) -> None:
        self._logger.warning(
            "woocommerce_import_record_skipped",
            kind=kind,
            record_id=record_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def import_completed(self, customers: int, subscriptions: int) -> None:
        self._logger.info(
            "woocommerce_import_completed",
            customers=customers,
            subscriptions=subscriptions,
            **self._get_context_kwargs(),
        )
