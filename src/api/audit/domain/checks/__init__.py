"""Pure reconciliation checks. Each returns the issue messages it found."""

from audit.domain.checks.card_checks import inactive_member_cards, unknown_active_cards
from audit.domain.checks.chat_checks import (
    chat_account_issues,
    members_missing_chat_accounts,
)
from audit.domain.checks.directory_checks import (
    group_membership_issues,
    index_group_members,
    members_missing_from_group,
)

__all__ = [
    "chat_account_issues",
    "group_membership_issues",
    "inactive_member_cards",
    "index_group_members",
    "members_missing_chat_accounts",
    "members_missing_from_group",
    "unknown_active_cards",
]
