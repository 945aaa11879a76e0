"""Directory (mailing) group reconciliation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from audit.domain.value_objects import MemberRecord


def index_group_members(
    members_by_group: Mapping[str, Sequence[str]],
) -> dict[str, list[str]]:
    """Invert group -> addresses into address -> groups, keeping group order."""
    groups_by_address: dict[str, list[str]] = {}
    for group, addresses in members_by_group.items():
        for address in addresses:
            groups_by_address.setdefault(address.lower(), []).append(group)
    return groups_by_address


def group_membership_issues(
    groups_by_address: Mapping[str, Sequence[str]],
    groups: Sequence[str],
    members: Sequence[MemberRecord],
) -> list[str]:
    """Check every address found in a group against the members view."""
    known_groups = {group.lower() for group in groups}

    issues = []
    for address, in_groups in groups_by_address.items():
        # A group nested in another of our groups is not a person
        if address in known_groups:
            continue

        matches = [member for member in members if member.email == address]
        group_list = ", ".join(in_groups)

        if len(matches) > 1:
            issues.append(f"More than one member exists for email address {address}")
            continue

        if not matches:
            issues.append(
                f"No member found for email address {address} in groups: {group_list}"
            )
            continue

        member = matches[0]
        if not member.is_member:
            issues.append(
                f"{member.full_name} with email ({address}) is not an active member "
                f"but is in groups: {group_list}"
            )

    return issues


def members_missing_from_group(
    groups_by_address: Mapping[str, Sequence[str]],
    members: Sequence[MemberRecord],
    members_group: str,
) -> list[str]:
    """Active members with an email who are not in the all-members group."""
    wanted = members_group.lower()

    issues = []
    for member in members:
        if member.email is None or not member.is_member:
            continue
        in_groups = groups_by_address.get(member.email, ())
        if any(group.lower() == wanted for group in in_groups):
            continue
        issues.append(
            f"{member.full_name} with email ({member.email}) is an active member "
            f"but is not part of {members_group}"
        )
    return issues
