"""Domain-Oriented Observability for the audit application layer."""

from audit.application.observability.issue_audit_probe import (
    DefaultIssueAuditProbe,
    IssueAuditProbe,
)

__all__ = [
    "DefaultIssueAuditProbe",
    "IssueAuditProbe",
]
