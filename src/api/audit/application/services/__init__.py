"""Application services for the audit bounded context."""

from audit.application.services.card_holder_service import CardHolderService
from audit.application.services.issue_audit_service import IssueAuditService

__all__ = [
    "CardHolderService",
    "IssueAuditService",
]
