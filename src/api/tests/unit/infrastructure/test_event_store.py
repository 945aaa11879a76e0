"""Unit tests for SqlAlchemyEventStore with a mocked session."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from infrastructure.event_store import SqlAlchemyEventStore
from infrastructure.event_store.models import StoredEventModel
from membership.domain.events import MembershipActivated, MembershipDeactivated
from membership.infrastructure.outbox import MembershipEventSerializer
from shared_kernel.event_store import ConcurrencyError

OCCURRED_AT = datetime(2026, 1, 8, 12, 0, 0, tzinfo=UTC)


def _session(current_version: int = 0) -> MagicMock:
    session = MagicMock()
    version_result = MagicMock()
    version_result.scalar_one.return_value = current_version
    session.execute = AsyncMock(return_value=version_result)
    session.flush = AsyncMock()
    return session


@pytest.fixture
def events():
    return [
        MembershipActivated(customer_id=7, occurred_at=OCCURRED_AT),
        MembershipDeactivated(customer_id=7, occurred_at=OCCURRED_AT),
    ]


class TestAppend:
    @pytest.mark.asyncio
    async def test_appends_with_consecutive_versions(self, events):
        session = _session(current_version=3)
        store = SqlAlchemyEventStore(session, MembershipEventSerializer())

        version = await store.append("membership", "7", events, expected_version=3)

        assert version == 5
        added = [call.args[0] for call in session.add.call_args_list]
        assert all(isinstance(model, StoredEventModel) for model in added)
        assert [model.version for model in added] == [4, 5]
        assert [model.event_type for model in added] == [
            "MembershipActivated",
            "MembershipDeactivated",
        ]
        assert added[0].payload["customer_id"] == 7
        session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stale_expected_version_raises(self, events):
        session = _session(current_version=4)
        store = SqlAlchemyEventStore(session, MembershipEventSerializer())

        with pytest.raises(ConcurrencyError):
            await store.append("membership", "7", events, expected_version=3)

        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_on_flush_is_a_conflict(self, events):
        session = _session()
        session.flush.side_effect = IntegrityError("INSERT", {}, Exception("dup"))
        store = SqlAlchemyEventStore(session, MembershipEventSerializer())

        with pytest.raises(ConcurrencyError):
            await store.append("membership", "7", events, expected_version=0)

    @pytest.mark.asyncio
    async def test_nothing_to_append_is_a_noop(self):
        session = _session()
        store = SqlAlchemyEventStore(session, MembershipEventSerializer())

        assert await store.append("membership", "7", [], expected_version=2) == 2
        session.execute.assert_not_awaited()


class TestReplay:
    @pytest.mark.asyncio
    async def test_decodes_events_in_version_order(self):
        serializer = MembershipEventSerializer()
        event = MembershipActivated(customer_id=7, occurred_at=OCCURRED_AT)
        model = StoredEventModel(
            id="01ARZCX0P0HZGQP3MZXQQ0NNZZ",
            aggregate_type="membership",
            aggregate_id="7",
            version=1,
            event_type="MembershipActivated",
            payload=serializer.serialize(event),
            occurred_at=OCCURRED_AT,
        )
        result = MagicMock()
        result.scalars.return_value.all.return_value = [model]
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)

        replayed = await SqlAlchemyEventStore(session, serializer).replay(
            "membership", "7"
        )

        assert replayed == [event]
