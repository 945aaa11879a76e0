"""PostgreSQL implementation of IWaiverRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from membership.domain.read_models import Waiver
from membership.domain.value_objects import PersonIdentity
from membership.infrastructure.models import WaiverModel
from membership.ports.repositories import IWaiverRepository


def _to_domain(model: WaiverModel) -> Waiver:
    return Waiver(
        waiver_id=model.waiver_id,
        template_id=model.template_id,
        template_version=model.template_version,
        status=model.status,
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
    )


class WaiverRepository(IWaiverRepository):
    """PostgreSQL-backed repository for the waiver read model."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lock_identity(self, identity: PersonIdentity) -> None:
        # Transaction-scoped, so commit or rollback releases it
        await self._session.execute(
            select(func.pg_advisory_xact_lock(func.hashtext(identity.email)))
        )

    async def get(self, waiver_id: str) -> Waiver | None:
        model = await self._session.get(WaiverModel, waiver_id)
        return None if model is None else _to_domain(model)

    async def find_accepted_by_identity(self, identity: PersonIdentity) -> list[Waiver]:
        stmt = (
            select(WaiverModel)
            .where(WaiverModel.status == "accepted")
            .where(WaiverModel.first_name == identity.first_name)
            .where(WaiverModel.last_name == identity.last_name)
            .where(WaiverModel.email == identity.email)
            .order_by(WaiverModel.waiver_id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def save(self, waiver: Waiver) -> None:
        model = await self._session.get(WaiverModel, waiver.waiver_id)
        if model is None:
            model = WaiverModel(waiver_id=waiver.waiver_id)
            self._session.add(model)

        model.template_id = waiver.template_id
        model.template_version = waiver.template_version
        model.status = waiver.status
        model.first_name = waiver.first_name
        model.last_name = waiver.last_name
        model.email = waiver.email
        await self._session.flush()
