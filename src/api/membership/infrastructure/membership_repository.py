"""Event-sourced persistence for membership aggregates.

Streams live in the shared event store. Every appended event is mirrored
into the outbox in the same transaction, which is what the reactor
worker consumes.
"""

from __future__ import annotations

from membership.domain.aggregates import MembershipAggregate
from membership.domain.events import WaiverAccepted
from membership.ports.repositories import IMembershipRepository
from shared_kernel.event_store.ports import IEventStore
from shared_kernel.outbox.ports import IOutboxRepository

MEMBERSHIP_STREAM = "membership"
WAIVER_STREAM = "waiver"


class MembershipRepository(IMembershipRepository):
    """Loads aggregates by replay and saves them by append."""

    def __init__(self, event_store: IEventStore, outbox: IOutboxRepository) -> None:
        self._event_store = event_store
        self._outbox = outbox

    async def load(self, customer_id: int) -> MembershipAggregate:
        events = await self._event_store.replay(MEMBERSHIP_STREAM, str(customer_id))
        return MembershipAggregate.replay(customer_id, events)

    async def save(self, aggregate: MembershipAggregate) -> int:
        events = aggregate.collect_events()
        stream_id = str(aggregate.customer_id)

        version = await self._event_store.append(
            MEMBERSHIP_STREAM, stream_id, events, expected_version=aggregate.version
        )
        for event in events:
            await self._outbox.append(event, MEMBERSHIP_STREAM, stream_id)

        aggregate.version = version
        return version

    async def record_waiver_accepted(self, event: WaiverAccepted) -> bool:
        if await self._event_store.replay(WAIVER_STREAM, event.waiver_id):
            return False

        await self._event_store.append(
            WAIVER_STREAM, event.waiver_id, [event], expected_version=0
        )
        await self._outbox.append(event, WAIVER_STREAM, event.waiver_id)
        return True
