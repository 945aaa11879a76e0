"""Pydantic models for membership webhook and import requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from membership.domain.read_models import Waiver


class WaiverWebhookRequest(BaseModel):
    """A waiver as pushed by the waiver service."""

    waiver_id: str = Field(..., min_length=1)
    template_id: str = Field(default="")
    template_version: str = Field(default="")
    status: str = Field(..., description="Only 'accepted' waivers are stored")
    first_name: str = Field(default="")
    last_name: str = Field(default="")
    email: str = Field(default="")

    def to_domain(self) -> Waiver:
        return Waiver(
            waiver_id=self.waiver_id,
            template_id=self.template_id,
            template_version=self.template_version,
            status=self.status,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )


class CardAccessRequest(BaseModel):
    """A card state change reported by the access-card system."""

    card_number: str = Field(..., min_length=1)
    active: bool


class RecordedEventsResponse(BaseModel):
    topic: str
    events: list[str]


class WaiverAcceptedResponse(BaseModel):
    waiver_id: str
    assigned_customer_ids: list[int]


class CardAccessResponse(BaseModel):
    card_number: str
    customers: int


class ImportResponse(BaseModel):
    customers: int
    subscriptions: int
    skipped: int
