"""FastAPI dependencies and worker wiring for the membership context."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import get_write_session
from infrastructure.dependencies import get_commerce_source
from infrastructure.event_store import SqlAlchemyEventStore
from infrastructure.outbox import OutboxRepository
from infrastructure.settings import (
    get_feature_flag_settings,
    get_reactor_settings,
    get_slack_settings,
)
from membership.application.action_runner import ActionRunner
from membership.application.locks import AggregateLocks
from membership.application.services import (
    ImportService,
    MembershipService,
    WaiverMatchingService,
)
from membership.infrastructure.customer_repository import (
    CustomerLookup,
    CustomerRepository,
)
from membership.infrastructure.feature_flags import FeatureFlags
from membership.infrastructure.membership_repository import MembershipRepository
from membership.infrastructure.outbox import (
    GoogleGroupsReactor,
    MembershipEventSerializer,
    SlackReactor,
)
from membership.infrastructure.waiver_repository import WaiverRepository
from shared_kernel.integrations.google import DirectoryService
from shared_kernel.integrations.slack import ChatPlatform
from shared_kernel.integrations.woocommerce import CommerceSource


@lru_cache
def get_aggregate_locks() -> AggregateLocks:
    """Process-wide per-customer locks (singleton)."""
    return AggregateLocks()


@lru_cache
def get_membership_event_serializer() -> MembershipEventSerializer:
    return MembershipEventSerializer()


def get_membership_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MembershipService:
    """Get MembershipService instance bound to the request session."""
    serializer = get_membership_event_serializer()
    customers = CustomerRepository(session)
    waivers = WaiverRepository(session)

    return MembershipService(
        session=session,
        membership_repository=MembershipRepository(
            event_store=SqlAlchemyEventStore(session, serializer),
            outbox=OutboxRepository(session, serializer),
        ),
        customer_repository=customers,
        waiver_repository=waivers,
        waiver_matching=WaiverMatchingService(waivers, customers),
        locks=get_aggregate_locks(),
    )


def get_import_service(
    membership_service: Annotated[MembershipService, Depends(get_membership_service)],
    source: Annotated[CommerceSource, Depends(get_commerce_source)],
) -> ImportService:
    return ImportService(source=source, membership_service=membership_service)


def build_membership_reactors() -> list[SlackReactor | GoogleGroupsReactor]:
    """Reactors registered with the worker's composite reactor."""
    settings = get_reactor_settings()
    flags = FeatureFlags.from_settings(get_feature_flag_settings())
    return [SlackReactor(settings, flags), GoogleGroupsReactor(settings, flags)]


def build_action_runner(
    sessionmaker: async_sessionmaker[AsyncSession],
    chat: ChatPlatform,
    directory: DirectoryService,
) -> ActionRunner:
    """Action runner used by the reactor worker."""
    slack = get_slack_settings()
    return ActionRunner(
        chat=chat,
        directory=directory,
        customers=CustomerLookup(sessionmaker),
        restricted_channels=list(slack.restricted_channels),
        membership_field_id=slack.membership_field_id or None,
    )
