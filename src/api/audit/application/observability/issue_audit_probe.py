"""Protocol for issue audit observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IssueAuditProbe(Protocol):
    """Domain probe for audit runs and card-holder snapshots."""

    def issue_audit_started(self) -> None:
        ...

    def sources_pulled(
        self,
        customers: int,
        subscriptions: int,
        chat_accounts: int,
        groups: int,
        card_holders: int | None,
    ) -> None:
        ...

    def group_members_progress(
        self, group: str, steps_done: int, steps_estimated: int
    ) -> None:
        ...

    def card_checks_skipped(self) -> None:
        ...

    def issue_audit_completed(self, total: int, counts: dict[str, int]) -> None:
        ...

    def card_holder_snapshot_recorded(self, card_holders: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> IssueAuditProbe:
        ...


class DefaultIssueAuditProbe:
    """Default implementation of IssueAuditProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIssueAuditProbe:
        return DefaultIssueAuditProbe(logger=self._logger, context=context)

    def issue_audit_started(self) -> None:
        self._logger.info("issue_audit_started", **self._get_context_kwargs())

    def sources_pulled(
        self,
        customers: int,
        subscriptions: int,
        chat_accounts: int,
        groups: int,
        card_holders: int | None,
    ) -> None:
        self._logger.info(
            "issue_audit_sources_pulled",
            customers=customers,
            subscriptions=subscriptions,
            chat_accounts=chat_accounts,
            groups=groups,
            card_holders=card_holders,
            **self._get_context_kwargs(),
        )

    def group_members_progress(
        self, group: str, steps_done: int, steps_estimated: int
    ) -> None:
        self._logger.debug(
            "issue_audit_group_members_progress",
            group=group,
            steps_done=steps_done,
            steps_estimated=steps_estimated,
            **self._get_context_kwargs(),
        )

    def card_checks_skipped(self) -> None:
        self._logger.warning(
            "issue_audit_card_checks_skipped",
            reason="no card holder snapshot recorded",
            **self._get_context_kwargs(),
        )

    def issue_audit_completed(self, total: int, counts: dict[str, int]) -> None:
        self._logger.info(
            "issue_audit_completed",
            total=total,
            counts=counts,
            **self._get_context_kwargs(),
        )

    def card_holder_snapshot_recorded(self, card_holders: int) -> None:
        self._logger.info(
            "card_holder_snapshot_recorded",
            card_holders=card_holders,
            **self._get_context_kwargs(),
        )
