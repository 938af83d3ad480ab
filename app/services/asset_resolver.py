"""Resolve program item asset references to display summaries."""
from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.enums import AssetType
from app.repositories.catalog_repository import CatalogRepository
from app.schemas.catalog import ServiceAsset, SessionAsset

logger = get_logger(__name__)

_DETAIL_SCHEMAS: dict[AssetType, type[SessionAsset] | type[ServiceAsset]] = {
    AssetType.SESSION: SessionAsset,
    AssetType.SERVICE: ServiceAsset,
}

AssetKey = tuple[AssetType, str]


def to_asset_details(asset_type: AssetType, asset) -> SessionAsset | ServiceAsset:
    return _DETAIL_SCHEMAS[AssetType(asset_type)].model_validate(asset)


class AssetReferenceResolver:
    """Looks up the session or service an item points at.

    A missing asset or a failed lookup yields None so that item lists still
    render, just without asset details.
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self._catalog = CatalogRepository(session)

    async def resolve(self, asset_type: AssetType, asset_id: str) -> SessionAsset | ServiceAsset | None:
        try:
            asset = await self._catalog.get_asset(asset_type, asset_id)
        except SQLAlchemyError as e:
            # the failed statement aborted the transaction
            await self._session.rollback()
            logger.warning("asset_lookup_failed", asset_type=AssetType(asset_type).value, asset_id=asset_id, error=str(e))
            return None

        if asset is None:
            logger.info("asset_not_found", asset_type=AssetType(asset_type).value, asset_id=asset_id)
            return None

        return to_asset_details(asset_type, asset)

    async def resolve_many(self, items: Iterable) -> dict[AssetKey, SessionAsset | ServiceAsset]:
        """Batch resolve ``(asset_type, asset_id)`` of every item; misses are omitted."""
        wanted: dict[AssetType, set[str]] = defaultdict(set)
        for item in items:
            wanted[AssetType(item.asset_type)].add(item.asset_id)

        resolved: dict[AssetKey, SessionAsset | ServiceAsset] = {}
        for asset_type, asset_ids in wanted.items():
            try:
                assets = await self._catalog.get_assets(asset_type, asset_ids)
            except SQLAlchemyError as e:
                await self._session.rollback()
                logger.warning("asset_batch_lookup_failed", asset_type=asset_type.value, error=str(e))
                continue

            for asset_id, asset in assets.items():
                resolved[(asset_type, asset_id)] = to_asset_details(asset_type, asset)

            missing = asset_ids - assets.keys()
            if missing:
                logger.info("assets_not_found", asset_type=asset_type.value, asset_ids=sorted(missing))

        return resolved
