"""Named toggles that alter reactor behavior.

Flags are read once from settings and handed to reactors at construction;
reactors never consult the environment themselves.

need_id_check_gets_added_to_slack_and_email
    off: need-id-check subscriptions get an id-check-only chat account
    on: they become regular chat members right away
keep_members_in_slack_and_email
    off: deactivated members are demoted to restricted chat accounts
    on: they keep full access; only the profile field changes
remove_deactivated_members_from_groups
    off: deactivated members stay in every directory group
    on: they are removed from all groups except the general one
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from infrastructure.settings import FeatureFlagSettings


class FeatureFlag(StrEnum):
    NEED_ID_CHECK_GETS_ADDED_TO_SLACK_AND_EMAIL = (
        "need_id_check_gets_added_to_slack_and_email"
    )
    KEEP_MEMBERS_IN_SLACK_AND_EMAIL = "keep_members_in_slack_and_email"
    REMOVE_DEACTIVATED_MEMBERS_FROM_GROUPS = "remove_deactivated_members_from_groups"


@dataclass(frozen=True)
class FeatureFlags:
    """The set of enabled flags."""

    enabled: frozenset[FeatureFlag] = field(default_factory=frozenset)

    def is_enabled(self, flag: FeatureFlag) -> bool:
        return flag in self.enabled

    @classmethod
    def of(cls, *flags: FeatureFlag) -> FeatureFlags:
        return cls(enabled=frozenset(flags))

    @classmethod
    def from_settings(cls, settings: FeatureFlagSettings) -> FeatureFlags:
        return cls(
            enabled=frozenset(
                flag for flag in FeatureFlag if getattr(settings, flag.value)
            )
        )
