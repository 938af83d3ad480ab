from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Service, Session
from app.models.enums import AssetType

ASSET_MODELS: dict[AssetType, type[Session] | type[Service]] = {
    AssetType.SESSION: Session,
    AssetType.SERVICE: Service,
}


class CatalogRepository:
    """Queries and writes over the session and service catalogs."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_asset(self, asset_type: AssetType, asset_id: str) -> Session | Service | None:
        model = ASSET_MODELS[AssetType(asset_type)]
        result = await self._session.execute(
            select(model).where(model.id == asset_id)
        )
        return result.scalar_one_or_none()

    async def get_assets(self, asset_type: AssetType, asset_ids: set[str]) -> dict[str, Session | Service]:
        if not asset_ids:
            return {}
        model = ASSET_MODELS[AssetType(asset_type)]
        result = await self._session.execute(
            select(model).where(model.id.in_(asset_ids))
        )
        return {asset.id: asset for asset in result.scalars().all()}

    async def list_sessions(self, search: str | None = None) -> list[Session]:
        query = select(Session)
        if search:
            query = query.where(func.lower(Session.title).contains(search.lower()))
        result = await self._session.execute(query.order_by(Session.title))
        return list(result.scalars().all())

    async def list_services(self, search: str | None = None) -> list[Service]:
        query = select(Service)
        if search:
            query = query.where(func.lower(Service.title).contains(search.lower()))
        result = await self._session.execute(query.order_by(Service.title))
        return list(result.scalars().all())

    async def count_sessions(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Session))
        return result.scalar_one()

    async def count_services(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Service))
        return result.scalar_one()

    async def create_asset(self, asset: Session | Service) -> Session | Service:
        self._session.add(asset)
        await self._session.flush()
        return asset

    async def update_asset(self, asset: Session | Service, updates: dict) -> Session | Service:
        for key, value in updates.items():
            setattr(asset, key, value)
        await self._session.flush()
        return asset

    async def delete_asset(self, asset: Session | Service) -> None:
        await self._session.delete(asset)
        await self._session.flush()
