"""SQLAlchemy ORM models for the audit bounded context."""

from audit.infrastructure.models.card_holder_snapshot import CardHolderSnapshotModel
from audit.infrastructure.models.legacy_member import LegacyMemberModel

__all__ = [
    "CardHolderSnapshotModel",
    "LegacyMemberModel",
]
