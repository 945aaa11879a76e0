"""Chat account reconciliation."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from audit.domain.value_objects import ChatAccount, MemberRecord


def _member_for(account: ChatAccount, members: Sequence[MemberRecord]):
    for member in members:
        if member.slack_id == account.id:
            return member
    return None


def chat_account_issues(
    accounts: Sequence[ChatAccount],
    members: Sequence[MemberRecord],
    ignored_ids: Collection[str] = (),
) -> list[str]:
    """Compare every human chat account with the member linked to it."""
    issues = []
    for account in accounts:
        if account.is_bot or account.id in ignored_ids:
            continue

        member = _member_for(account, members)
        if member is None:
            if account.is_full:
                issues.append(
                    f"{account.name} with slack id ({account.id}) is a full user "
                    "in slack but I have no membership record of them."
                )
            continue

        who = f"{member.full_name} with slack id ({account.id})"
        if member.is_member:
            # Nothing more to do for an outstanding invite
            if account.is_invited_user:
                continue
            if account.deleted:
                issues.append(f"{who} is deleted, but they are a member")
            elif account.is_restricted:
                issues.append(f"{who} is restricted, but they are a member")
            elif account.is_ultra_restricted:
                issues.append(f"{who} is ultra restricted, but they are a member")
        elif account.is_full:
            issues.append(
                f"{who} is not an active member but they have a full slack account."
            )

    return issues


def members_missing_chat_accounts(
    accounts: Sequence[ChatAccount], members: Sequence[MemberRecord]
) -> list[str]:
    """Active members whose chat id matches no account at all."""
    account_ids = {account.id for account in accounts}
    return [
        f"{member.full_name} ({member.id}) doesn't appear to have a slack account"
        for member in members
        if member.is_member and member.slack_id not in account_ids
    ]
