"""PostgreSQL implementation of ICustomerRepository.

The repository only reads and adds rows; the membership service owns the
transaction.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from membership.domain.read_models import Card, Customer
from membership.domain.value_objects import PersonIdentity
from membership.infrastructure.models import CardModel, CustomerModel
from membership.ports.repositories import ICustomerLookup, ICustomerRepository
from shared_kernel.access_cards import canonical_card_number


def _to_domain(model: CustomerModel) -> Customer:
    return Customer(
        woo_id=model.woo_id,
        username=model.username,
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        slack_id=model.slack_id,
        member=model.member,
        capabilities=tuple(model.capabilities or ()),
        cards=[
            Card(
                number=card.number,
                customer_id=model.woo_id,
                active=card.active,
                member_has_card=card.member_has_card,
                ever_activated=card.ever_activated,
            )
            for card in model.cards
        ],
        deleted_at=model.deleted_at,
    )


class CustomerRepository(ICustomerRepository):
    """PostgreSQL-backed repository for the customer read model."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_model(self, woo_id: int) -> CustomerModel | None:
        stmt = (
            select(CustomerModel)
            .options(selectinload(CustomerModel.cards))
            .where(CustomerModel.woo_id == woo_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_woo_id(self, woo_id: int) -> Customer | None:
        model = await self._get_model(woo_id)
        return None if model is None else _to_domain(model)

    async def find_by_identity(self, identity: PersonIdentity) -> list[Customer]:
        stmt = (
            select(CustomerModel)
            .options(selectinload(CustomerModel.cards))
            .where(CustomerModel.first_name == identity.first_name)
            .where(CustomerModel.last_name == identity.last_name)
            .where(CustomerModel.email == identity.email)
            .where(CustomerModel.deleted_at.is_(None))
            .order_by(CustomerModel.woo_id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def find_by_card_number(self, number: str) -> list[Customer]:
        stmt = (
            select(CustomerModel)
            .options(selectinload(CustomerModel.cards))
            .where(
                CustomerModel.cards.any(
                    CardModel.number == canonical_card_number(number)
                )
            )
            .order_by(CustomerModel.woo_id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def save(self, customer: Customer) -> None:
        """Create or update a customer and upsert its cards.

        Cards are never deleted; a card dropped from the profile keeps its
        row with ``member_has_card`` cleared.
        """
        model = await self._get_model(customer.woo_id)
        if model is None:
            model = CustomerModel(woo_id=customer.woo_id, cards=[])
            self._session.add(model)

        model.username = customer.username
        model.first_name = customer.first_name
        model.last_name = customer.last_name
        model.email = customer.email
        model.slack_id = customer.slack_id
        model.member = customer.member
        model.capabilities = list(customer.capabilities)
        model.deleted_at = customer.deleted_at

        existing = {card.number: card for card in model.cards}
        for card in customer.cards:
            card_model = existing.get(card.number)
            if card_model is None:
                card_model = CardModel(number=card.number)
                model.cards.append(card_model)
            card_model.active = card.active
            card_model.member_has_card = card.member_has_card
            card_model.ever_activated = card.ever_activated

        await self._session.flush()


class CustomerLookup(ICustomerLookup):
    """Read-only lookup opening a short-lived session per call."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def get(self, customer_id: int) -> Customer | None:
        async with self._sessionmaker() as session:
            return await CustomerRepository(session).get_by_woo_id(customer_id)
