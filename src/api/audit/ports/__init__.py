"""Ports for the audit bounded context."""

from audit.ports.repositories import (
    ICardHolderSnapshotRepository,
    ILegacyMemberRepository,
)

__all__ = [
    "ICardHolderSnapshotRepository",
    "ILegacyMemberRepository",
]
