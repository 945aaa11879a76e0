"""The issue auditor: one stateless reconciliation pass over every source."""

from __future__ import annotations

import asyncio
from collections.abc import Collection

from audit.application.observability import DefaultIssueAuditProbe, IssueAuditProbe
from audit.domain.checks import (
    chat_account_issues,
    group_membership_issues,
    inactive_member_cards,
    index_group_members,
    members_missing_chat_accounts,
    members_missing_from_group,
    unknown_active_cards,
)
from audit.domain.issue_report import IssueReport
from audit.domain.members import build_members
from audit.domain.value_objects import ChatAccount, IssueCategory
from audit.ports.repositories import (
    ICardHolderSnapshotRepository,
    ILegacyMemberRepository,
)
from shared_kernel.integrations.google import DirectoryService, ProgressCallback
from shared_kernel.integrations.slack import ChatPlatform
from shared_kernel.integrations.woocommerce import CommerceSource


class IssueAuditService:
    """Pulls every source, then cross-references them into an IssueReport.

    All pulls finish before the first check runs. Gateway errors propagate
    unchanged; mismatches never raise, they are the report.
    """

    def __init__(
        self,
        source: CommerceSource,
        chat: ChatPlatform,
        directory: DirectoryService,
        legacy_members: ILegacyMemberRepository,
        card_holders: ICardHolderSnapshotRepository,
        domain: str,
        members_group: str,
        excluded_groups: Collection[str] = (),
        ignored_chat_ids: Collection[str] = (),
        probe: IssueAuditProbe | None = None,
    ):
        self._source = source
        self._chat = chat
        self._directory = directory
        self._legacy_members = legacy_members
        self._card_holders = card_holders
        self._domain = domain
        self._members_group = members_group
        self._excluded_groups = {group.lower() for group in excluded_groups}
        self._ignored_chat_ids = frozenset(ignored_chat_ids)
        self._probe = probe or DefaultIssueAuditProbe()

    def _progress_for(self, group: str) -> ProgressCallback:
        def report(steps_done: int, steps_estimated: int) -> None:
            self._probe.group_members_progress(group, steps_done, steps_estimated)

        return report

    async def audit(self) -> IssueReport:
        self._probe.issue_audit_started()

        customers, subscriptions, users, all_groups = await asyncio.gather(
            self._source.list_customers(),
            self._source.list_subscriptions(),
            self._chat.list_users(),
            self._directory.groups_for_domain(self._domain),
        )
        groups = [
            group for group in all_groups if group.lower() not in self._excluded_groups
        ]
        group_members = await asyncio.gather(
            *(
                self._directory.members_of(group, progress=self._progress_for(group))
                for group in groups
            )
        )
        # Both repositories share one session, so they are read one after the other
        legacy_members = await self._legacy_members.list_all()
        card_holders = await self._card_holders.latest()

        self._probe.sources_pulled(
            customers=len(customers),
            subscriptions=len(subscriptions),
            chat_accounts=len(users),
            groups=len(groups),
            card_holders=None if card_holders is None else len(card_holders),
        )

        members = build_members(customers, subscriptions, legacy_members)
        accounts = [ChatAccount.from_api(user) for user in users]
        groups_by_address = index_group_members(dict(zip(groups, group_members)))

        report = IssueReport()
        if card_holders is None:
            self._probe.card_checks_skipped()
        else:
            report.extend(
                IssueCategory.CARD, unknown_active_cards(card_holders, members)
            )
            report.extend(
                IssueCategory.CARD, inactive_member_cards(card_holders, members)
            )

        report.extend(
            IssueCategory.CHAT_ACCOUNT,
            chat_account_issues(accounts, members, self._ignored_chat_ids),
        )
        report.extend(
            IssueCategory.CHAT_ACCOUNT,
            members_missing_chat_accounts(accounts, members),
        )

        report.extend(
            IssueCategory.DIRECTORY_GROUPS,
            group_membership_issues(groups_by_address, groups, members),
        )
        report.extend(
            IssueCategory.DIRECTORY_GROUPS,
            members_missing_from_group(groups_by_address, members, self._members_group),
        )

        self._probe.issue_audit_completed(
            report.total,
            {category.value: report.count(category) for category in IssueCategory},
        )
        return report
