"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        customer_id: E-commerce identifier of the customer being handled.
        run_id: Identifier of a batch run (import or issue audit).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", customer_id=42)
        probe = DefaultMembershipServiceProbe().with_context(context)
    """

    request_id: str | None = None
    customer_id: int | None = None
    run_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.customer_id is not None:
            result["customer_id"] = self.customer_id
        if self.run_id is not None:
            result["run_id"] = self.run_id
        result.update(self.extra)
        return result

    def with_customer(self, customer_id: int) -> ObservationContext:
        """Create a new context with the customer id set."""
        return replace(self, customer_id=customer_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
