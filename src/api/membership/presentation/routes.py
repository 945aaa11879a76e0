"""HTTP routes feeding external facts into the membership context."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException, status

from membership.application.services import ImportService, MembershipService
from membership.application.value_objects import (
    CustomerFact,
    SubscriptionFact,
    UserMembershipFact,
)
from membership.dependencies import get_import_service, get_membership_service
from membership.domain.events import DomainEvent
from membership.domain.value_objects import CustomerId
from membership.ports.exceptions import UnsupportedEventError
from membership.presentation.models import (
    CardAccessRequest,
    CardAccessResponse,
    ImportResponse,
    RecordedEventsResponse,
    WaiverAcceptedResponse,
    WaiverWebhookRequest,
)
from shared_kernel.event_store import ConcurrencyError
from shared_kernel.integrations.exceptions import GatewayError

webhooks_router = APIRouter(prefix="/webhooks", tags=["webhooks"])
imports_router = APIRouter(prefix="/imports", tags=["imports"])


def _deleted_customer_id(payload: dict[str, Any]) -> int:
    return CustomerId.from_string(str(payload.get("id"))).value


# Topic -> (MembershipService operation, payload parser)
_WOOCOMMERCE_TOPICS: dict[str, tuple[str, Callable[[dict[str, Any]], Any]]] = {
    "customer.created": ("customer_created", CustomerFact.from_woocommerce),
    "customer.updated": ("customer_updated", CustomerFact.from_woocommerce),
    "customer.deleted": ("customer_deleted", _deleted_customer_id),
    "subscription.created": (
        "subscription_created",
        SubscriptionFact.from_woocommerce,
    ),
    "subscription.updated": (
        "subscription_updated",
        SubscriptionFact.from_woocommerce,
    ),
    "user_membership.created": (
        "user_membership_created",
        UserMembershipFact.from_woocommerce,
    ),
}


def _parse_woocommerce(topic: str, payload: dict[str, Any]) -> tuple[str, Any]:
    """Turn a webhook delivery into a service operation and its argument.

    Raises:
        UnsupportedEventError: If the topic is not handled
        ValueError: If the payload lacks the fields the fact needs
    """
    try:
        operation, parse = _WOOCOMMERCE_TOPICS[topic]
    except KeyError:
        raise UnsupportedEventError(topic) from None
    return operation, parse(payload)


@webhooks_router.post(
    "/woocommerce",
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"description": "Unknown webhook topic"},
        409: {"description": "Concurrent write to the same customer; retry"},
        422: {"description": "Payload is missing required fields"},
    },
)
async def woocommerce_webhook(
    payload: Annotated[dict[str, Any], Body()],
    service: Annotated[MembershipService, Depends(get_membership_service)],
    topic: Annotated[str, Header(alias="X-WC-Webhook-Topic")],
) -> RecordedEventsResponse:
    """Record a customer, subscription or plan membership fact."""
    try:
        operation, fact = _parse_woocommerce(topic, payload)
    except UnsupportedEventError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except ValueError as e:
        # Payload parsed as JSON but lacks the fields the fact needs
        raise HTTPException(status_code=422, detail=str(e)) from e

    record: Callable[[Any], Awaitable[tuple[DomainEvent, ...]]] = getattr(
        service, operation
    )
    try:
        events = await record(fact)
    except ConcurrencyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return RecordedEventsResponse(
        topic=topic, events=[type(event).__name__ for event in events]
    )


@webhooks_router.post("/waivers", status_code=status.HTTP_202_ACCEPTED)
async def waiver_webhook(
    request: WaiverWebhookRequest,
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> WaiverAcceptedResponse:
    """Store an accepted waiver and link it to matching customers."""
    try:
        assigned = await service.waiver_accepted(request.to_domain())
    except ConcurrencyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return WaiverAcceptedResponse(
        waiver_id=request.waiver_id, assigned_customer_ids=assigned
    )


@webhooks_router.post("/cards", status_code=status.HTTP_202_ACCEPTED)
async def card_access_webhook(
    request: CardAccessRequest,
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> CardAccessResponse:
    """Mirror a card activation or deactivation onto the card holders."""
    customers = await service.card_access_changed(request.card_number, request.active)
    return CardAccessResponse(card_number=request.card_number, customers=customers)


@imports_router.post(
    "/woocommerce",
    status_code=status.HTTP_202_ACCEPTED,
    responses={502: {"description": "The e-commerce platform could not be read"}},
)
async def import_woocommerce(
    service: Annotated[ImportService, Depends(get_import_service)],
) -> ImportResponse:
    """Import every customer and subscription from the e-commerce platform."""
    try:
        result = await service.import_all()
    except GatewayError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)
        ) from e

    return ImportResponse(
        customers=result.customers,
        subscriptions=result.subscriptions,
        skipped=result.skipped,
    )
