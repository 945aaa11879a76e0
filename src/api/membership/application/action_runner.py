"""Executes actions against the chat platform and the directory service.

Every action is idempotent: it either checks the target state before
mutating, or treats an "already in the desired state" answer as success.
A retry after partial success therefore never duplicates an effect.

Gateway errors are never caught here. Transient failures and unexpected
responses propagate to the reactor worker, which retries the whole outbox
entry and eventually dead-letters it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

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
    SendMessage,
    UpdateChatProfileMembership,
)
from membership.application.observability import (
    ActionRunnerProbe,
    DefaultActionRunnerProbe,
)
from membership.domain.read_models import Customer
from membership.ports.exceptions import (
    ChatAccountNotLinkedError,
    CustomerNotFoundError,
    UnresolvableRecipientError,
)
from membership.ports.repositories import ICustomerLookup
from shared_kernel.integrations.exceptions import UnexpectedGatewayResponse
from shared_kernel.integrations.google.protocols import DirectoryService
from shared_kernel.integrations.slack.protocols import ChatPlatform

_NOT_IN_CHANNEL = "not_in_channel"
_ALREADY_IN_CHANNEL = "already_in_channel"
_ALREADY_INVITED = frozenset(
    {"already_in_team", "already_invited", "user_already_exists"}
)

MEMBER_PROFILE_VALUE = "Member"
NON_MEMBER_PROFILE_VALUE = "Not a member"


class ActionRunner:
    """Runs one action at a time; implements the worker's ActionExecutor."""

    def __init__(
        self,
        chat: ChatPlatform,
        directory: DirectoryService,
        customers: ICustomerLookup,
        restricted_channels: list[str] | None = None,
        membership_field_id: str | None = None,
        probe: ActionRunnerProbe | None = None,
    ):
        self._chat = chat
        self._directory = directory
        self._customers = customers
        self._restricted_channels = restricted_channels or []
        self._membership_field_id = membership_field_id
        self._probe = probe or DefaultActionRunnerProbe()

    async def run(self, action: Action) -> None:
        match action:
            case AddToDirectoryGroup():
                await self._add_to_directory_group(action)
            case RemoveFromDirectoryGroup():
                await self._remove_from_directory_group(action)
            case RemoveFromAllDirectoryGroups():
                await self._remove_from_all_directory_groups(action)
            case AddToChannel():
                await self._add_to_channel(action)
            case RemoveFromChannel():
                await self._remove_from_channel(action)
            case AddToUserGroup():
                await self._add_to_user_group(action)
            case RemoveFromUserGroup():
                await self._remove_from_user_group(action)
            case MakeRegularChatMember():
                await self._make_regular_chat_member(action)
            case InviteIdCheckOnlyChatMember():
                await self._invite_id_check_only_chat_member(action)
            case DemoteToRestrictedChatMember():
                await self._demote_to_restricted_chat_member(action)
            case UpdateChatProfileMembership():
                await self._update_chat_profile_membership(action)
            case SendMessage():
                await self._send_message(action)
            case _:
                raise TypeError(f"Unsupported action: {type(action).__name__}")

    # -- lookups ----------------------------------------------------------

    async def _customer(self, customer_id: int) -> Customer:
        customer = await self._customers.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def _slack_id(self, customer_id: int) -> str:
        customer = await self._customer(customer_id)
        if not customer.slack_id:
            raise ChatAccountNotLinkedError(customer_id)
        return customer.slack_id

    async def _channel_ids(self, channels: list[str]) -> list[str]:
        return [await self._chat.channel_id(channel) for channel in channels]

    def _completed(self, action: Action, customer_id: int | None) -> None:
        self._probe.action_completed(type(action).__name__, customer_id)

    def _already_satisfied(self, action: Action, customer_id: int | None) -> None:
        self._probe.action_already_satisfied(type(action).__name__, customer_id)

    def _skipped(self, action: Action, customer_id: int | None, reason: str) -> None:
        self._probe.action_skipped(type(action).__name__, customer_id, reason)

    # -- directory groups -------------------------------------------------

    async def _add_to_directory_group(self, action: AddToDirectoryGroup) -> None:
        customer = await self._customer(action.customer_id)
        if customer.email is None:
            self._skipped(action, action.customer_id, "no email")
            return

        if await self._directory.has_member(action.group, customer.email):
            self._already_satisfied(action, action.customer_id)
            return

        await self._directory.add_member(action.group, customer.email)
        self._completed(action, action.customer_id)

    async def _remove_from_directory_group(
        self, action: RemoveFromDirectoryGroup
    ) -> None:
        customer = await self._customer(action.customer_id)
        if customer.email is None:
            self._skipped(action, action.customer_id, "no email")
            return

        if not await self._directory.has_member(action.group, customer.email):
            self._already_satisfied(action, action.customer_id)
            return

        await self._directory.remove_member(action.group, customer.email)
        self._completed(action, action.customer_id)

    async def _remove_from_all_directory_groups(
        self, action: RemoveFromAllDirectoryGroups
    ) -> None:
        customer = await self._customer(action.customer_id)
        if customer.email is None:
            self._skipped(action, action.customer_id, "no email")
            return

        keep = {group.lower() for group in action.keep}
        for group in await self._directory.groups_for_member(customer.email):
            if group.lower() in keep:
                continue
            # A concurrent removal makes this return False; both are fine
            await self._directory.remove_member(group, customer.email)

        self._completed(action, action.customer_id)

    # -- channels ---------------------------------------------------------

    async def _call_in_channel(
        self,
        operation: Callable[[], Awaitable[dict[str, Any]]],
        channel_id: str,
    ) -> dict[str, Any]:
        """Call a channel operation, joining the channel and retrying once
        when the bot is not in it."""
        response = await operation()
        if response.get("ok") or response.get("error") != _NOT_IN_CHANNEL:
            return response

        await self._chat.join_channel(channel_id)
        self._probe.channel_joined_for_retry(channel_id, operation.__name__)
        return await operation()

    async def _add_to_channel(self, action: AddToChannel) -> None:
        slack_id = await self._slack_id(action.customer_id)
        channel_id = await self._chat.channel_id(action.channel)

        async def invite() -> dict[str, Any]:
            return await self._chat.invite_to_channel(slack_id, channel_id)

        response = await self._call_in_channel(invite, channel_id)
        if response.get("ok"):
            self._completed(action, action.customer_id)
            return
        if response.get("error") == _ALREADY_IN_CHANNEL:
            self._already_satisfied(action, action.customer_id)
            return

        raise UnexpectedGatewayResponse(
            f"Invite of {slack_id} to {action.channel} failed",
            payload=response,
            gateway="slack",
        )

    async def _remove_from_channel(self, action: RemoveFromChannel) -> None:
        customer = await self._customer(action.customer_id)
        if not customer.slack_id:
            self._skipped(action, action.customer_id, "no chat account")
            return

        slack_id = customer.slack_id
        channel_id = await self._chat.channel_id(action.channel)

        async def kick() -> dict[str, Any]:
            return await self._chat.kick_from_channel(slack_id, channel_id)

        response = await self._call_in_channel(kick, channel_id)
        if response.get("ok"):
            self._completed(action, action.customer_id)
            return
        if response.get("error") == _ALREADY_IN_CHANNEL:
            self._already_satisfied(action, action.customer_id)
            return

        raise UnexpectedGatewayResponse(
            f"Kick of {slack_id} from {action.channel} failed",
            payload=response,
            gateway="slack",
        )

    # -- user groups ------------------------------------------------------

    async def _add_to_user_group(self, action: AddToUserGroup) -> None:
        slack_id = await self._slack_id(action.customer_id)
        group_id = await self._chat.user_group_id(action.handle)
        members = await self._chat.user_group_members(group_id)

        if slack_id in members:
            self._already_satisfied(action, action.customer_id)
            return

        await self._chat.set_user_group_members(group_id, [*members, slack_id])
        self._completed(action, action.customer_id)

    async def _remove_from_user_group(self, action: RemoveFromUserGroup) -> None:
        customer = await self._customer(action.customer_id)
        if not customer.slack_id:
            self._skipped(action, action.customer_id, "no chat account")
            return

        group_id = await self._chat.user_group_id(action.handle)
        members = await self._chat.user_group_members(group_id)

        if customer.slack_id not in members:
            self._already_satisfied(action, action.customer_id)
            return

        remaining = [member for member in members if member != customer.slack_id]
        await self._chat.set_user_group_members(group_id, remaining)
        self._completed(action, action.customer_id)

    # -- chat accounts ----------------------------------------------------

    async def _invite(self, customer: Customer, restricted: bool) -> None:
        if customer.email is None:
            raise ChatAccountNotLinkedError(customer.woo_id)

        channel_ids = await self._channel_ids(self._restricted_channels)
        response = await self._chat.invite_user(customer.email, channel_ids, restricted)
        if response.get("ok") or response.get("error") in _ALREADY_INVITED:
            return

        raise UnexpectedGatewayResponse(
            f"Invite of {customer.email} failed", payload=response, gateway="slack"
        )

    async def _make_regular_chat_member(self, action: MakeRegularChatMember) -> None:
        customer = await self._customer(action.customer_id)
        if customer.slack_id:
            await self._chat.set_regular(customer.slack_id)
        else:
            await self._invite(customer, restricted=False)
        self._completed(action, action.customer_id)

    async def _invite_id_check_only_chat_member(
        self, action: InviteIdCheckOnlyChatMember
    ) -> None:
        customer = await self._customer(action.customer_id)
        if customer.slack_id:
            channel_ids = await self._channel_ids(self._restricted_channels)
            await self._chat.set_restricted(customer.slack_id, channel_ids)
        else:
            await self._invite(customer, restricted=True)
        self._completed(action, action.customer_id)

    async def _demote_to_restricted_chat_member(
        self, action: DemoteToRestrictedChatMember
    ) -> None:
        customer = await self._customer(action.customer_id)
        if not customer.slack_id:
            self._skipped(action, action.customer_id, "no chat account")
            return

        channel_ids = await self._channel_ids(self._restricted_channels)
        await self._chat.set_restricted(customer.slack_id, channel_ids)
        self._completed(action, action.customer_id)

    async def _update_chat_profile_membership(
        self, action: UpdateChatProfileMembership
    ) -> None:
        if not self._membership_field_id:
            self._skipped(action, action.customer_id, "no membership profile field")
            return

        customer = await self._customer(action.customer_id)
        if not customer.slack_id:
            self._skipped(action, action.customer_id, "no chat account")
            return

        value = MEMBER_PROFILE_VALUE if customer.member else NON_MEMBER_PROFILE_VALUE
        await self._chat.set_profile_field(
            customer.slack_id, self._membership_field_id, value
        )
        self._completed(action, action.customer_id)

    # -- messages ---------------------------------------------------------

    async def resolve_recipient(self, recipient: Customer | int | str) -> str:
        """Turn any accepted recipient form into a single chat id."""
        if isinstance(recipient, Customer):
            if not recipient.slack_id:
                raise ChatAccountNotLinkedError(recipient.woo_id)
            return recipient.slack_id

        if isinstance(recipient, str):
            if recipient.startswith(("U", "C")):
                return recipient
            # Neither a user nor a channel id, so a customer id as a string
            try:
                recipient = int(recipient)
            except ValueError:
                raise UnresolvableRecipientError(recipient) from None

        return await self._slack_id(recipient)

    async def _send_message(self, action: SendMessage) -> None:
        recipient = await self.resolve_recipient(action.recipient)
        await self._chat.post_message(recipient, action.text)
        self._completed(action, None)
