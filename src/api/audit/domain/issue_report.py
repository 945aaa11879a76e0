"""The categorized discrepancy report produced by one audit run."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from audit.domain.value_objects import IssueCategory


@dataclass
class IssueReport:
    """Issue messages grouped by category, in the order they were found.

    Nothing is deduplicated: the same discrepancy found twice is two
    issues, and every run starts from an empty report.
    """

    _issues: dict[IssueCategory, list[str]] = field(
        default_factory=lambda: {category: [] for category in IssueCategory}
    )

    def add(self, category: IssueCategory, message: str) -> None:
        self._issues[category].append(message)

    def extend(self, category: IssueCategory, messages: Iterable[str]) -> None:
        self._issues[category].extend(messages)

    def issues(self, category: IssueCategory) -> list[str]:
        return list(self._issues[category])

    def count(self, category: IssueCategory) -> int:
        return len(self._issues[category])

    @property
    def total(self) -> int:
        return sum(len(messages) for messages in self._issues.values())

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "categories": [
                {
                    "name": category.value,
                    "count": len(messages),
                    "issues": list(messages),
                }
                for category, messages in self._issues.items()
            ],
        }
