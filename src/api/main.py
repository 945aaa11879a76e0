"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

import audit.infrastructure.models  # noqa: F401 (registers tables on Base)
import membership.infrastructure.models  # noqa: F401 (registers tables on Base)
from audit.presentation import router as audit_router
from infrastructure.database.dependencies import (
    close_database_connections,
    ensure_schema,
    get_sessionmaker,
)
from infrastructure.dependencies import (
    get_chat_platform,
    get_commerce_source,
    get_directory_service,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.outbox import CompositeReactor, CompositeSerializer, ReactorWorker
from infrastructure.settings import get_database_settings, get_outbox_settings
from infrastructure.version import __version__
from membership.dependencies import (
    build_action_runner,
    build_membership_reactors,
    get_membership_event_serializer,
)
from membership.presentation import router as membership_router
from shared_kernel.outbox.observability import DefaultOutboxWorkerProbe


def build_reactor_worker() -> ReactorWorker:
    """Wire every context's serializer and reactors into one worker."""
    probe = DefaultOutboxWorkerProbe()

    serializer = CompositeSerializer()
    serializer.register(get_membership_event_serializer())

    reactor = CompositeReactor(probe=probe)
    for membership_reactor in build_membership_reactors():
        reactor.register(membership_reactor, context_name="membership")

    sessionmaker = get_sessionmaker()
    settings = get_outbox_settings()
    return ReactorWorker(
        session_factory=sessionmaker,
        serializer=serializer,
        reactor=reactor,
        executor=build_action_runner(
            sessionmaker, get_chat_platform(), get_directory_service()
        ),
        probe=probe,
        poll_interval_seconds=settings.poll_interval_seconds,
        batch_size=settings.batch_size,
        max_retries=settings.max_retries,
    )


@asynccontextmanager
async def membership_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration and table creation
    - Reactor worker start and stop
    - Gateway client and engine shutdown
    """
    configure_logging()
    probe = DefaultStartupProbe()

    if get_database_settings().create_schema:
        await ensure_schema()

    worker: ReactorWorker | None = None
    if get_outbox_settings().worker_enabled:
        worker = build_reactor_worker()
        await worker.start()
    else:
        probe.reactor_worker_disabled()

    probe.application_started(__version__)

    yield

    if worker is not None:
        await worker.stop()

    for client in (get_chat_platform(), get_directory_service(), get_commerce_source()):
        await client.aclose()

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title="Membership API",
    description="Membership lifecycle reconciliation for a makerspace",
    version=__version__,
    lifespan=membership_lifespan,
)

app.include_router(membership_router)
app.include_router(audit_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
