"""Exceptions raised by event store implementations."""

from __future__ import annotations


class ConcurrencyError(Exception):
    """Raised when a stream moved past the version the writer replayed.

    Retrying the whole command (replay, decide, append) is always safe.
    """

    def __init__(
        self,
        aggregate_type: str,
        aggregate_id: str,
        expected_version: int,
        actual_version: int | None,
    ) -> None:
        found = "a later version" if actual_version is None else actual_version
        super().__init__(
            f"Stream {aggregate_type}/{aggregate_id} is at {found}, "
            f"expected version {expected_version}"
        )
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.expected_version = expected_version
        self.actual_version = actual_version
