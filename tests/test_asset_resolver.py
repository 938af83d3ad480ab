"""Tests for resolving item asset references to session/service summaries."""
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import TypeAdapter
from sqlalchemy.exc import OperationalError

from app.models.enums import AssetType
from app.schemas.catalog import AssetDetails, ServiceAsset, SessionAsset
from app.schemas.program import ProgramItemDraft
from app.services.asset_resolver import AssetReferenceResolver


class TestResolve:
    @pytest.mark.asyncio
    async def test_resolves_session(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)

        asset = await resolver.resolve(AssetType.SESSION, catalog["breathing"].id)

        assert isinstance(asset, SessionAsset)
        assert asset.title == "Morning Breathing"
        assert asset.duration == 10

    @pytest.mark.asyncio
    async def test_resolves_service(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)

        asset = await resolver.resolve(AssetType.SERVICE, catalog["consult"].id)

        assert isinstance(asset, ServiceAsset)
        assert asset.default_duration == 45

    @pytest.mark.asyncio
    async def test_wrong_type_is_a_miss(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)

        assert await resolver.resolve(AssetType.SERVICE, catalog["breathing"].id) is None

    @pytest.mark.asyncio
    async def test_unknown_id_is_a_miss(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)

        assert await resolver.resolve(AssetType.SESSION, "missing") is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_a_miss(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)
        failure = OperationalError("SELECT ...", {}, Exception("timeout"))

        with patch.object(resolver._catalog, "get_asset", AsyncMock(side_effect=failure)):
            assert await resolver.resolve(AssetType.SESSION, catalog["breathing"].id) is None

    @pytest.mark.asyncio
    async def test_lookup_failure_rolls_back_before_next_lookup(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)
        failure = OperationalError("SELECT ...", {}, Exception("timeout"))
        rollback = AsyncMock(wraps=db_session.rollback)

        with patch.object(db_session, "rollback", rollback):
            with patch.object(resolver._catalog, "get_asset", AsyncMock(side_effect=failure)):
                assert await resolver.resolve(AssetType.SESSION, catalog["breathing"].id) is None

            asset = await resolver.resolve(AssetType.SERVICE, catalog["consult"].id)

        rollback.assert_awaited_once()
        assert asset.title == "Nutrition Consult"


class TestResolveMany:
    @pytest.mark.asyncio
    async def test_keys_by_type_and_id(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)
        items = [
            ProgramItemDraft(asset_type="session", asset_id=catalog["yoga"].id, title="Yoga"),
            ProgramItemDraft(asset_type="service", asset_id=catalog["workshop"].id, title="Workshop"),
            ProgramItemDraft(asset_type="session", asset_id="missing", title="Gone"),
        ]

        resolved = await resolver.resolve_many(items)

        assert set(resolved) == {
            (AssetType.SESSION, catalog["yoga"].id),
            (AssetType.SERVICE, catalog["workshop"].id),
        }
        assert resolved[(AssetType.SERVICE, catalog["workshop"].id)].title == "Sleep Hygiene Workshop"

    @pytest.mark.asyncio
    async def test_empty_input(self, db_session):
        assert await AssetReferenceResolver(db_session).resolve_many([]) == {}

    @pytest.mark.asyncio
    async def test_failed_type_is_skipped_after_rollback(self, db_session, catalog):
        resolver = AssetReferenceResolver(db_session)
        failure = OperationalError("SELECT ...", {}, Exception("timeout"))
        get_assets = resolver._catalog.get_assets
        rollback = AsyncMock(wraps=db_session.rollback)

        async def sessions_fail(asset_type, asset_ids):
            if asset_type == AssetType.SESSION:
                raise failure
            return await get_assets(asset_type, asset_ids)

        items = [
            ProgramItemDraft(asset_type="session", asset_id=catalog["yoga"].id, title="Yoga"),
            ProgramItemDraft(asset_type="service", asset_id=catalog["workshop"].id, title="Workshop"),
        ]
        with patch.object(db_session, "rollback", rollback):
            with patch.object(resolver._catalog, "get_assets", AsyncMock(side_effect=sessions_fail)):
                resolved = await resolver.resolve_many(items)

        rollback.assert_awaited_once()
        assert set(resolved) == {(AssetType.SERVICE, catalog["workshop"].id)}


def test_asset_details_discriminated_by_asset_type():
    adapter = TypeAdapter(AssetDetails)

    asset = adapter.validate_python(
        {
            "asset_type": "service",
            "id": "svc-1",
            "title": "Group Class",
            "focus_area": "Body",
            "service_type": "group-class",
            "status": "active",
        }
    )

    assert isinstance(asset, ServiceAsset)
