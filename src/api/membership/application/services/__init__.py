"""Application services for the membership bounded context.

Application services orchestrate the aggregate, repositories and locks to
fulfill use cases. They are the "front door" to the membership context.
"""

from membership.application.services.import_service import ImportResult, ImportService
from membership.application.services.membership_service import MembershipService
from membership.application.services.waiver_matching_service import (
    WaiverMatchingService,
)

__all__ = [
    "ImportResult",
    "ImportService",
    "MembershipService",
    "WaiverMatchingService",
]
