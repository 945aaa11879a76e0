"""Request and response models for the audit API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from audit.domain.value_objects import CardHolder


class IssueCategoryResponse(BaseModel):
    name: str
    count: int
    issues: list[str]


class IssueReportResponse(BaseModel):
    """One audit run. Every category is listed, empty ones included."""

    total: int
    categories: list[IssueCategoryResponse]


class CardHolderRequest(BaseModel):
    card_num: str = Field(..., min_length=1)
    first_name: str
    last_name: str

    def to_domain(self) -> CardHolder:
        return CardHolder(
            card_num=self.card_num,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class CardHolderSnapshotRequest(BaseModel):
    """Every currently active card, as exported by the access-card system."""

    card_holders: list[CardHolderRequest]


class CardHolderSnapshotResponse(BaseModel):
    card_holders: int
