"""Tests for session and service create, update and delete in CatalogService."""
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.config.settings import get_settings
from app.core.exceptions import NotFoundError, PersistenceError, ValidationError
from app.models import Service, Session
from app.models.enums import ContentType, FocusArea, ServiceType, SessionStatus
from app.schemas.catalog import ServicePayload, SessionPayload
from app.schemas.program import ProgramItemDraft
from app.services.catalog import CatalogService
from app.services.program import ProgramCompositionService


@pytest.fixture
def session_payload(catalog) -> SessionPayload:
    return SessionPayload(
        title="Evening Wind Down",
        short_description="Ten quiet minutes before bed",
        focus_area=FocusArea.SLEEP,
        tags=["sleep", "sleep", " evening "],
        content_type=ContentType.AUDIO,
        duration=10,
        provider_id=catalog["provider"].id,
        file_url="https://cdn.example.org/wind-down.mp3",
        base_price=199.0,
    )


@pytest.fixture
def service_payload(catalog) -> ServicePayload:
    return ServicePayload(
        title="Physio Review",
        short_description="One-to-one posture review",
        focus_area=FocusArea.BODY,
        service_type=ServiceType.IN_PERSON,
        delivery_channel="clinic",
        default_duration=30,
        default_capacity=1,
        qualified_roles="physiotherapist",
        provider_id=catalog["dual"].id,
        base_price=1500.0,
    )


async def count_rows(session_maker, model) -> int:
    async with session_maker() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


class TestSessions:
    @pytest.mark.asyncio
    async def test_create_session(self, db_session, session_payload):
        service = CatalogService(db_session)

        session = await service.save_session(session_payload, acting_user_id="usr-042")

        assert session.id
        assert session.created_by == "usr-042"
        assert session.tags == ["sleep", "evening"]
        assert session.currency == get_settings().default_currency

    @pytest.mark.asyncio
    async def test_create_defaults_creator(self, db_session, session_payload):
        session = await CatalogService(db_session).save_session(session_payload)

        assert session.created_by == get_settings().default_user_id

    @pytest.mark.asyncio
    async def test_update_session_keeps_creator(self, session_maker, catalog, session_payload):
        async with session_maker() as s:
            created = await CatalogService(s).save_session(session_payload, acting_user_id="usr-042")

        async with session_maker() as s:
            updated = await CatalogService(s).save_session(
                session_payload.model_copy(update={"title": "Evening Reset", "status": SessionStatus.REVIEW}),
                session_id=created.id,
            )

        assert updated.id == created.id
        assert updated.title == "Evening Reset"
        assert updated.status == SessionStatus.REVIEW
        assert updated.created_by == "usr-042"
        assert await count_rows(session_maker, Session) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "short_description", "provider_id", "file_url"])
    async def test_required_fields(self, db_session, session_payload, field):
        with pytest.raises(ValidationError) as exc_info:
            await CatalogService(db_session).save_session(session_payload.model_copy(update={field: "  "}))

        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_duration_must_be_positive(self, db_session, session_payload):
        with pytest.raises(ValidationError) as exc_info:
            await CatalogService(db_session).save_session(session_payload.model_copy(update={"duration": 0}))

        assert exc_info.value.code == "VAL_DURATION_001"

    @pytest.mark.asyncio
    async def test_paid_session_needs_price(self, db_session, session_payload):
        with pytest.raises(ValidationError) as exc_info:
            await CatalogService(db_session).save_session(session_payload.model_copy(update={"base_price": None}))

        assert exc_info.value.field == "base_price"

    @pytest.mark.asyncio
    async def test_free_session_without_price(self, db_session, session_payload):
        session = await CatalogService(db_session).save_session(
            session_payload.model_copy(update={"is_free": True, "base_price": None})
        )

        assert session.is_free
        assert session.base_price is None

    @pytest.mark.asyncio
    async def test_update_unknown_session(self, db_session, session_payload):
        with pytest.raises(NotFoundError):
            await CatalogService(db_session).save_session(session_payload, session_id="missing")

    @pytest.mark.asyncio
    async def test_write_failure_raises_persistence_error(self, session_maker, catalog, session_payload):
        async with session_maker() as s:
            service = CatalogService(s)
            failure = OperationalError("INSERT ...", {}, Exception("connection lost"))
            with patch.object(service._catalog, "create_asset", AsyncMock(side_effect=failure)):
                with pytest.raises(PersistenceError) as exc_info:
                    await service.save_session(session_payload)

        assert exc_info.value.code == "PERSIST_SAVE_SESSION_001"
        assert await count_rows(session_maker, Session) == 2

    @pytest.mark.asyncio
    async def test_delete_session_leaves_items_without_details(self, session_maker, catalog, program_payload):
        async with session_maker() as s:
            composition = await ProgramCompositionService(s).save_program(
                program_payload,
                [ProgramItemDraft(asset_type="session", asset_id=catalog["breathing"].id, day_no=1, title="Breathe")],
            )

        async with session_maker() as s:
            await CatalogService(s).delete_session(catalog["breathing"].id)

        async with session_maker() as s:
            rows = await ProgramCompositionService(s).get_builder_view(composition.program.id)

        assert await count_rows(session_maker, Session) == 1
        assert len(rows) == 1
        assert rows[0].asset is None

    @pytest.mark.asyncio
    async def test_delete_unknown_session(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await CatalogService(db_session).delete_session("missing")

        assert exc_info.value.code == "NF_SESSION_001"


class TestServices:
    @pytest.mark.asyncio
    async def test_create_service(self, db_session, service_payload):
        service = await CatalogService(db_session).save_service(service_payload, acting_user_id="usr-042")

        assert service.id
        assert service.created_by == "usr-042"
        assert service.default_capacity == 1

    @pytest.mark.asyncio
    async def test_update_service(self, session_maker, catalog, service_payload):
        async with session_maker() as s:
            await CatalogService(s).save_service(
                service_payload.model_copy(update={"default_capacity": 8}), service_id=catalog["workshop"].id
            )

        async with session_maker() as s:
            stored = await s.get(Service, catalog["workshop"].id)

        assert stored.title == "Physio Review"
        assert stored.default_capacity == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field", ["title", "short_description", "provider_id", "delivery_channel", "qualified_roles"]
    )
    async def test_required_fields(self, db_session, service_payload, field):
        with pytest.raises(ValidationError) as exc_info:
            await CatalogService(db_session).save_service(service_payload.model_copy(update={field: ""}))

        assert exc_info.value.field == field

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "update, field",
        [
            ({"default_duration": 0}, "default_duration"),
            ({"default_capacity": 0}, "default_capacity"),
            ({"base_price": -1.0}, "base_price"),
        ],
    )
    async def test_numeric_bounds(self, db_session, service_payload, update, field):
        with pytest.raises(ValidationError) as exc_info:
            await CatalogService(db_session).save_service(service_payload.model_copy(update=update))

        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_free_service_allowed(self, db_session, service_payload):
        service = await CatalogService(db_session).save_service(service_payload.model_copy(update={"base_price": 0.0}))

        assert service.base_price == 0.0

    @pytest.mark.asyncio
    async def test_delete_service(self, session_maker, catalog):
        async with session_maker() as s:
            await CatalogService(s).delete_service(catalog["consult"].id)

        assert await count_rows(session_maker, Service) == 1
