"""Domain-Oriented Observability for the membership application layer."""

from membership.application.observability.action_runner_probe import (
    ActionRunnerProbe,
    DefaultActionRunnerProbe,
)
from membership.application.observability.import_service_probe import (
    DefaultImportServiceProbe,
    ImportServiceProbe,
)
from membership.application.observability.membership_service_probe import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)

__all__ = [
    "ActionRunnerProbe",
    "DefaultActionRunnerProbe",
    "ImportServiceProbe",
    "DefaultImportServiceProbe",
    "MembershipServiceProbe",
    "DefaultMembershipServiceProbe",
]
