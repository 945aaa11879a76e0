"""Unit tests for membership webhook and import routes."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from membership.application.services import (
    ImportResult,
    ImportService,
    MembershipService,
)
from membership.application.value_objects import CustomerFact, SubscriptionFact
from membership.domain.events import MembershipActivated, SubscriptionCreated
from shared_kernel.event_store import ConcurrencyError
from shared_kernel.integrations.exceptions import TransientGatewayError

NOW = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def mock_membership_service():
    return AsyncMock(spec=MembershipService)


@pytest.fixture
def mock_import_service():
    return AsyncMock(spec=ImportService)


@pytest.fixture
def test_client(mock_membership_service, mock_import_service):
    """Create TestClient with mocked services."""
    from fastapi import FastAPI

    from membership import dependencies
    from membership.presentation import router

    app = FastAPI()
    app.dependency_overrides[dependencies.get_membership_service] = (
        lambda: mock_membership_service
    )
    app.dependency_overrides[dependencies.get_import_service] = (
        lambda: mock_import_service
    )
    app.include_router(router)

    return TestClient(app)


def _post_woocommerce(client, topic, payload):
    return client.post(
        "/webhooks/woocommerce", json=payload, headers={"X-WC-Webhook-Topic": topic}
    )


class TestWooCommerceWebhook:
    def test_subscription_created_reports_recorded_events(
        self, test_client, mock_membership_service
    ):
        mock_membership_service.subscription_created.return_value = (
            SubscriptionCreated(
                customer_id=1, subscription_id=10, status="active", occurred_at=NOW
            ),
            MembershipActivated(customer_id=1, occurred_at=NOW),
        )

        response = _post_woocommerce(
            test_client,
            "subscription.created",
            {"id": 10, "customer_id": 1, "status": "active"},
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json() == {
            "topic": "subscription.created",
            "events": ["SubscriptionCreated", "MembershipActivated"],
        }
        mock_membership_service.subscription_created.assert_awaited_once_with(
            SubscriptionFact(customer_id=1, subscription_id=10, status="active")
        )

    def test_customer_updated_passes_a_typed_fact(
        self, test_client, mock_membership_service
    ):
        mock_membership_service.customer_updated.return_value = ()

        response = _post_woocommerce(
            test_client, "customer.updated", {"id": 3, "email": "A@B.com"}
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        (fact,) = mock_membership_service.customer_updated.await_args.args
        assert isinstance(fact, CustomerFact)
        assert fact.profile.email == "a@b.com"

    def test_customer_deleted_uses_payload_id(
        self, test_client, mock_membership_service
    ):
        mock_membership_service.customer_deleted.return_value = ()

        _post_woocommerce(test_client, "customer.deleted", {"id": "8"})

        mock_membership_service.customer_deleted.assert_awaited_once_with(8)

    def test_unknown_topic_returns_400(self, test_client):
        response = _post_woocommerce(test_client, "order.created", {"id": 1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_payload_returns_422(self, test_client, mock_membership_service):
        response = _post_woocommerce(
            test_client, "subscription.updated", {"id": 10, "customer_id": 1}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_membership_service.subscription_updated.assert_not_awaited()

    def test_missing_topic_header_returns_422(self, test_client):
        response = test_client.post("/webhooks/woocommerce", json={"id": 1})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_concurrent_write_returns_409(self, test_client, mock_membership_service):
        mock_membership_service.customer_created.side_effect = ConcurrencyError(
            "membership", "1", 1, 2
        )

        response = _post_woocommerce(test_client, "customer.created", {"id": 1})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_service_value_error_is_not_reported_as_bad_payload(
        self, test_client, mock_membership_service
    ):
        mock_membership_service.customer_created.side_effect = ValueError("bug")

        with pytest.raises(ValueError, match="bug"):
            _post_woocommerce(test_client, "customer.created", {"id": 1})


class TestWaiverWebhook:
    def test_returns_assigned_customers(self, test_client, mock_membership_service):
        mock_membership_service.waiver_accepted.return_value = [1, 2]

        response = test_client.post(
            "/webhooks/waivers",
            json={
                "waiver_id": "w-1",
                "status": "accepted",
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "jane@example.com",
            },
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json() == {"waiver_id": "w-1", "assigned_customer_ids": [1, 2]}
        (waiver,) = mock_membership_service.waiver_accepted.await_args.args
        assert waiver.is_accepted

    def test_missing_status_returns_422(self, test_client):
        response = test_client.post("/webhooks/waivers", json={"waiver_id": "w-1"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestCardWebhook:
    def test_returns_number_of_holders(self, test_client, mock_membership_service):
        mock_membership_service.card_access_changed.return_value = 2

        response = test_client.post(
            "/webhooks/cards", json={"card_number": "00123", "active": True}
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json() == {"card_number": "00123", "customers": 2}
        mock_membership_service.card_access_changed.assert_awaited_once_with(
            "00123", True
        )

    def test_empty_card_number_returns_422(self, test_client):
        response = test_client.post(
            "/webhooks/cards", json={"card_number": "", "active": True}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestImportRoute:
    def test_returns_import_counts(self, test_client, mock_import_service):
        mock_import_service.import_all.return_value = ImportResult(
            customers=3, subscriptions=2, skipped=1
        )

        response = test_client.post("/imports/woocommerce")

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json() == {"customers": 3, "subscriptions": 2, "skipped": 1}

    def test_gateway_failure_returns_502(self, test_client, mock_import_service):
        mock_import_service.import_all.side_effect = TransientGatewayError("down")

        response = test_client.post("/imports/woocommerce")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
