"""Protocol for the directory service holding the mailing groups."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

# Receives (steps_done, steps_estimated) after every fetched page.
ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class DirectoryService(Protocol):
    """Directory group operations."""

    async def groups_for_domain(
        self, domain: str, progress: ProgressCallback | None = None
    ) -> list[str]:
        """List the addresses of every group in a domain."""
        ...

    async def groups_for_member(self, email: str) -> list[str]:
        """List the addresses of the groups an address belongs to."""
        ...

    async def members_of(
        self, group: str, progress: ProgressCallback | None = None
    ) -> list[str]:
        """List the member addresses of a group."""
        ...

    async def has_member(self, group: str, email: str) -> bool:
        """Check whether an address is a member of a group."""
        ...

    async def add_member(self, group: str, email: str) -> bool:
        """Add an address to a group.

        Returns:
            False when the address was already a member
        """
        ...

    async def remove_member(self, group: str, email: str) -> bool:
        """Remove an address from a group.

        Returns:
            False when the address was not a member
        """
        ...
