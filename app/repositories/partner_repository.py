from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PartnerType
from app.models.partner import BusinessPartner
from app.repositories.base import Repository

PROVIDER_TYPES = (PartnerType.PROVIDER, PartnerType.DUAL)


class PartnerRepository(Repository[BusinessPartner, str]):
    """Access to the partner directory."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, id: str) -> BusinessPartner | None:
        result = await self._session.execute(
            select(BusinessPartner).where(BusinessPartner.id == id)
        )
        return result.scalar_one_or_none()

    async def list(self, filter: dict | None = None) -> list[BusinessPartner]:
        query = select(BusinessPartner)
        filter = filter or {}

        if 'type' in filter:
            query = query.where(BusinessPartner.type == filter['type'])

        if 'parent_id' in filter:
            query = query.where(BusinessPartner.parent_id == filter['parent_id'])

        result = await self._session.execute(query.order_by(BusinessPartner.name))
        return list(result.scalars().all())

    async def list_providers(self) -> list[BusinessPartner]:
        result = await self._session.execute(
            select(BusinessPartner)
            .where(BusinessPartner.type.in_(PROVIDER_TYPES))
            .order_by(BusinessPartner.name)
        )
        return list(result.scalars().all())

    async def names_by_id(self, partner_ids: set[str]) -> dict[str, str]:
        if not partner_ids:
            return {}
        result = await self._session.execute(
            select(BusinessPartner.id, BusinessPartner.name).where(BusinessPartner.id.in_(partner_ids))
        )
        return {partner_id: name for partner_id, name in result.all()}

    async def count_children(self, id: str) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(BusinessPartner).where(BusinessPartner.parent_id == id)
        )
        return result.scalar_one()

    async def create(self, entity: BusinessPartner) -> BusinessPartner:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update(self, id: str, updates: dict) -> BusinessPartner | None:
        partner = await self.get(id)
        if partner:
            for key, value in updates.items():
                setattr(partner, key, value)
            await self._session.flush()
        return partner

    async def delete(self, id: str) -> bool:
        partner = await self.get(id)
        if partner:
            await self._session.delete(partner)
            await self._session.flush()
            return True
        return False
