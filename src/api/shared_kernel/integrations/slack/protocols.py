"""Protocol for the chat platform consumed by actions and the auditor.

Methods returning ``dict`` hand back the raw ``{"ok": ..., "error": ...}``
payload so that callers can treat some error codes as expected outcomes.
Every other method raises ``UnexpectedGatewayResponse`` when the platform
answers ``ok: false``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ChatPlatform(Protocol):
    """Chat platform operations."""

    async def list_users(self) -> list[dict[str, Any]]:
        """List every account in the workspace, bots and deleted included."""
        ...

    async def channel_id(self, channel: str) -> str:
        """Resolve a channel name (or pass through a channel id)."""
        ...

    async def kick_from_channel(self, user_id: str, channel_id: str) -> dict[str, Any]:
        """Remove a user from a channel and return the raw payload."""
        ...

    async def join_channel(self, channel_id: str) -> dict[str, Any]:
        """Make the bot join a channel and return the raw payload."""
        ...

    async def invite_to_channel(self, user_id: str, channel_id: str) -> dict[str, Any]:
        """Invite a user to a channel and return the raw payload."""
        ...

    async def user_group_id(self, handle: str) -> str:
        """Resolve a user group handle to its id."""
        ...

    async def user_group_members(self, group_id: str) -> list[str]:
        """List the user ids in a user group."""
        ...

    async def set_user_group_members(
        self, group_id: str, user_ids: Sequence[str]
    ) -> None:
        """Replace the member list of a user group."""
        ...

    async def post_message(self, recipient: str, text: str) -> None:
        """Post a message to a user or channel id."""
        ...

    async def set_profile_field(self, user_id: str, field_id: str, value: str) -> None:
        """Set a custom profile field on a user."""
        ...

    async def set_regular(self, user_id: str) -> None:
        """Promote an account to a full workspace member."""
        ...

    async def set_restricted(self, user_id: str, channel_ids: Sequence[str]) -> None:
        """Demote an account to a restricted (multi-channel guest) account."""
        ...

    async def invite_user(
        self, email: str, channel_ids: Sequence[str], restricted: bool
    ) -> dict[str, Any]:
        """Invite an email address to the workspace and return the raw payload."""
        ...
