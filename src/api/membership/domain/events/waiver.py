"""Waiver domain events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WaiverAccepted:
    """Event raised when a liability waiver is signed.

    Stored in the waiver's own stream; it is linked to a customer later by
    an exact (first name, last name, email) match.

    Attributes:
        waiver_id: Waiver service id
        template_id: Template the waiver was signed from
        template_version: Version of that template
        first_name: Signer's given name
        last_name: Signer's family name
        email: Signer's email in canonical case
        occurred_at: When the event occurred (UTC)
    """

    waiver_id: str
    template_id: str
    template_version: str
    first_name: str
    last_name: str
    email: str
    occurred_at: datetime


@dataclass(frozen=True)
class WaiverAssignedToCustomer:
    """Event raised the first time a waiver matches a customer."""

    customer_id: int
    waiver_id: str
    occurred_at: datetime
