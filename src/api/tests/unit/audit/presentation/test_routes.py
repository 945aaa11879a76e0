"""Unit tests for audit HTTP routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from audit.application.services import CardHolderService, IssueAuditService
from audit.domain.issue_report import IssueReport
from audit.domain.value_objects import CardHolder, IssueCategory
from shared_kernel.integrations.exceptions import UnexpectedGatewayResponse


@pytest.fixture
def mock_audit_service():
    return AsyncMock(spec=IssueAuditService)


@pytest.fixture
def mock_card_holder_service():
    return AsyncMock(spec=CardHolderService)


@pytest.fixture
def test_client(mock_audit_service, mock_card_holder_service):
    """Create TestClient with mocked services."""
    from fastapi import FastAPI

    from audit import dependencies
    from audit.presentation import router

    app = FastAPI()
    app.dependency_overrides[dependencies.get_issue_audit_service] = (
        lambda: mock_audit_service
    )
    app.dependency_overrides[dependencies.get_card_holder_service] = (
        lambda: mock_card_holder_service
    )
    app.include_router(router)

    return TestClient(app)


class TestGetIssues:
    def test_returns_every_category(self, test_client, mock_audit_service):
        report = IssueReport()
        report.add(IssueCategory.DIRECTORY_GROUPS, "No member found for a@b.com")
        mock_audit_service.audit.return_value = report

        response = test_client.get("/audit/issues")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 1
        assert [category["name"] for category in body["categories"]] == [
            "Issue with a card",
            "Issue with a Slack account",
            "Issue with google groups",
        ]
        assert body["categories"][2]["issues"] == ["No member found for a@b.com"]

    def test_gateway_failure_returns_502(self, test_client, mock_audit_service):
        mock_audit_service.audit.side_effect = UnexpectedGatewayResponse(
            "bad page", payload={"error": "x"}, gateway="google"
        )

        response = test_client.get("/audit/issues")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY


class TestPutCardHolders:
    def test_records_snapshot(self, test_client, mock_card_holder_service):
        mock_card_holder_service.record_snapshot.return_value = 2

        response = test_client.put(
            "/audit/card-holders",
            json={
                "card_holders": [
                    {"card_num": "00123", "first_name": "Jane", "last_name": "Doe"},
                    {"card_num": "456", "first_name": "John", "last_name": "Roe"},
                ]
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"card_holders": 2}
        (holders,) = mock_card_holder_service.record_snapshot.await_args.args
        assert holders[0] == CardHolder("00123", "Jane", "Doe")

    def test_empty_snapshot_is_accepted(self, test_client, mock_card_holder_service):
        mock_card_holder_service.record_snapshot.return_value = 0

        response = test_client.put("/audit/card-holders", json={"card_holders": []})

        assert response.status_code == status.HTTP_200_OK

    def test_blank_card_number_returns_422(self, test_client):
        response = test_client.put(
            "/audit/card-holders",
            json={
                "card_holders": [{"card_num": "", "first_name": "A", "last_name": "B"}]
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
