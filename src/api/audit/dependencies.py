"""FastAPI dependencies for the audit bounded context."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audit.application.services import CardHolderService, IssueAuditService
from audit.infrastructure.card_holder_snapshot_repository import (
    CardHolderSnapshotRepository,
)
from audit.infrastructure.legacy_member_repository import LegacyMemberRepository
from infrastructure.database.dependencies import get_read_session, get_write_session
from infrastructure.dependencies import (
    get_chat_platform,
    get_commerce_source,
    get_directory_service,
)
from infrastructure.settings import get_audit_settings
from shared_kernel.integrations.google import DirectoryService
from shared_kernel.integrations.slack import ChatPlatform
from shared_kernel.integrations.woocommerce import CommerceSource


def get_issue_audit_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    source: Annotated[CommerceSource, Depends(get_commerce_source)],
    chat: Annotated[ChatPlatform, Depends(get_chat_platform)],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
) -> IssueAuditService:
    """Get IssueAuditService instance for one audit run."""
    settings = get_audit_settings()
    return IssueAuditService(
        source=source,
        chat=chat,
        directory=directory,
        legacy_members=LegacyMemberRepository(session),
        card_holders=CardHolderSnapshotRepository(session),
        domain=settings.domain,
        members_group=settings.members_group,
        excluded_groups=settings.excluded_groups,
        ignored_chat_ids=settings.ignored_chat_ids,
    )


def get_card_holder_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> CardHolderService:
    return CardHolderService(
        session=session, repository=CardHolderSnapshotRepository(session)
    )
