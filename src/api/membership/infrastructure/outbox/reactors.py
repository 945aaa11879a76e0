"""Reactors mapping membership events to actions.

Reactors only decide which follow-up work an event implies. Membership
decisions (activation, deactivation, board changes) were already made by
the aggregate; the only branching here is on feature flags and on event
fields such as a plan id.
"""

from __future__ import annotations

from infrastructure.settings import ReactorSettings
from membership.application.actions import (
    Action,
    AddToChannel,
    AddToDirectoryGroup,
    AddToUserGroup,
    DemoteToRestrictedChatMember,
    InviteIdCheckOnlyChatMember,
    MakeRegularChatMember,
    RemoveFromAllDirectoryGroups,
    RemoveFromChannel,
    RemoveFromDirectoryGroup,
    RemoveFromUserGroup,
    UpdateChatProfileMembership,
)
from membership.domain.events import (
    CustomerBecameBoardMember,
    CustomerCreated,
    CustomerRemovedFromBoard,
    DomainEvent,
    MembershipActivated,
    MembershipDeactivated,
    SubscriptionUpdated,
    UserMembershipCreated,
)
from membership.domain.value_objects import SubscriptionStatus
from membership.infrastructure.feature_flags import FeatureFlag, FeatureFlags


class SlackReactor:
    """Chat platform follow-ups."""

    def __init__(self, settings: ReactorSettings, flags: FeatureFlags) -> None:
        self._settings = settings
        self._flags = flags
        self._equipment_channels: dict[int, str] = {}
        if settings.printer_3d_plan_id is not None:
            self._equipment_channels[settings.printer_3d_plan_id] = (
                settings.printer_3d_channel
            )
        if settings.laser_cutter_plan_id is not None:
            self._equipment_channels[settings.laser_cutter_plan_id] = (
                settings.laser_cutter_channel
            )

    def supported_event_types(self) -> frozenset[str]:
        return frozenset(
            {
                "SubscriptionUpdated",
                "MembershipActivated",
                "MembershipDeactivated",
                "CustomerBecameBoardMember",
                "CustomerRemovedFromBoard",
                "UserMembershipCreated",
            }
        )

    def react(self, event: DomainEvent) -> list[Action]:
        match event:
            case SubscriptionUpdated(status=SubscriptionStatus.NEED_ID_CHECK):
                if self._flags.is_enabled(
                    FeatureFlag.NEED_ID_CHECK_GETS_ADDED_TO_SLACK_AND_EMAIL
                ):
                    return [MakeRegularChatMember(event.customer_id)]
                return [InviteIdCheckOnlyChatMember(event.customer_id)]

            case MembershipActivated():
                return [MakeRegularChatMember(event.customer_id)]

            case MembershipDeactivated():
                actions: list[Action] = [UpdateChatProfileMembership(event.customer_id)]
                if not self._flags.is_enabled(
                    FeatureFlag.KEEP_MEMBERS_IN_SLACK_AND_EMAIL
                ):
                    actions.append(DemoteToRestrictedChatMember(event.customer_id))
                return actions

            case CustomerBecameBoardMember():
                return [
                    AddToChannel(event.customer_id, self._settings.board_channel),
                    AddToUserGroup(event.customer_id, self._settings.board_user_group),
                ]

            case CustomerRemovedFromBoard():
                return [
                    RemoveFromChannel(event.customer_id, self._settings.board_channel),
                    RemoveFromUserGroup(
                        event.customer_id, self._settings.board_user_group
                    ),
                ]

            case UserMembershipCreated(status=SubscriptionStatus.ACTIVE):
                channel = self._equipment_channels.get(event.plan_id)
                if channel is None:
                    return []
                return [AddToChannel(event.customer_id, channel)]

        return []


class GoogleGroupsReactor:
    """Directory group follow-ups."""

    def __init__(self, settings: ReactorSettings, flags: FeatureFlags) -> None:
        self._settings = settings
        self._flags = flags

    def supported_event_types(self) -> frozenset[str]:
        return frozenset(
            {
                "CustomerCreated",
                "MembershipActivated",
                "MembershipDeactivated",
                "CustomerBecameBoardMember",
                "CustomerRemovedFromBoard",
            }
        )

    def react(self, event: DomainEvent) -> list[Action]:
        match event:
            case CustomerCreated():
                return [
                    AddToDirectoryGroup(event.customer_id, self._settings.general_group)
                ]

            case MembershipActivated():
                return [
                    AddToDirectoryGroup(event.customer_id, self._settings.members_group)
                ]

            case MembershipDeactivated():
                # Members stay on the mailing lists unless the flag says otherwise
                if not self._flags.is_enabled(
                    FeatureFlag.REMOVE_DEACTIVATED_MEMBERS_FROM_GROUPS
                ):
                    return []
                return [
                    RemoveFromAllDirectoryGroups(
                        event.customer_id, keep=(self._settings.general_group,)
                    )
                ]

            case CustomerBecameBoardMember():
                return [
                    AddToDirectoryGroup(event.customer_id, self._settings.board_group)
                ]

            case CustomerRemovedFromBoard():
                return [
                    RemoveFromDirectoryGroup(
                        event.customer_id, self._settings.board_group
                    )
                ]

        return []
