"""HTTP routes for the issue auditor."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from audit.application.services import CardHolderService, IssueAuditService
from audit.dependencies import get_card_holder_service, get_issue_audit_service
from audit.presentation.models import (
    CardHolderSnapshotRequest,
    CardHolderSnapshotResponse,
    IssueReportResponse,
)
from shared_kernel.integrations.exceptions import GatewayError

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get(
    "/issues",
    responses={502: {"description": "A source system could not be read"}},
)
async def get_issues(
    service: Annotated[IssueAuditService, Depends(get_issue_audit_service)],
) -> IssueReportResponse:
    """Run a full audit and return the categorized issues."""
    try:
        report = await service.audit()
    except GatewayError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)
        ) from e

    return IssueReportResponse.model_validate(report.as_dict())


@router.put("/card-holders")
async def put_card_holders(
    request: CardHolderSnapshotRequest,
    service: Annotated[CardHolderService, Depends(get_card_holder_service)],
) -> CardHolderSnapshotResponse:
    """Replace the active-card listing the card checks run against."""
    recorded = await service.record_snapshot(
        [holder.to_domain() for holder in request.card_holders]
    )
    return CardHolderSnapshotResponse(card_holders=recorded)
