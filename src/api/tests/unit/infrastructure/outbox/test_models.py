"""Unit tests for OutboxModel."""

from datetime import UTC, datetime

from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex

from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.value_objects import OutboxEntry

OCCURRED_AT = datetime(2026, 1, 9, 12, 0, 0, tzinfo=UTC)


def _model(**overrides) -> OutboxModel:
    values = dict(
        id="01ARZCX0P0HZGQP3MZXQQ0NNZZ",
        aggregate_type="membership",
        aggregate_id="42",
        event_type="MembershipDeactivated",
        payload={"customer_id": 42},
        occurred_at=OCCURRED_AT,
        retry_count=1,
        last_error="TransientGatewayError('slack down')",
    )
    values.update(overrides)
    return OutboxModel(**values)


class TestToEntry:
    def test_carries_the_event_and_retry_state(self):
        entry = _model().to_entry()

        assert entry == OutboxEntry(
            id="01ARZCX0P0HZGQP3MZXQQ0NNZZ",
            aggregate_type="membership",
            aggregate_id="42",
            event_type="MembershipDeactivated",
            payload={"customer_id": 42},
            occurred_at=OCCURRED_AT,
            retry_count=1,
            last_error="TransientGatewayError('slack down')",
        )
        assert entry.stream == "membership/42"

    def test_unflushed_retry_count_reads_as_zero(self):
        assert _model(retry_count=None).to_entry().retry_count == 0


class TestIndexes:
    def test_pending_index_is_partial(self):
        (pending,) = [
            index
            for index in OutboxModel.__table__.indexes
            if index.name == "ix_reactor_outbox_pending"
        ]

        ddl = str(CreateIndex(pending).compile(dialect=postgresql.dialect()))

        assert "WHERE processed_at IS NULL AND failed_at IS NULL" in ddl
