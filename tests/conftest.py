"""
Shared fixtures: an in-memory SQLite database, a seeded catalog and an API client.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.database import get_db, init_db
from app.main import app
from app.models import (
    BusinessPartner,
    ContentType,
    FocusArea,
    PartnerType,
    Service,
    ServiceStatus,
    ServiceType,
    Session,
    SessionStatus,
)
from app.schemas.program import ProgramItemDraft, ProgramPayload


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncSession:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def catalog(session_maker) -> dict:
    """Two sessions, two services, a provider and an institution."""
    async with session_maker() as session:
        provider = BusinessPartner(name="Serene Minds Studio", type=PartnerType.PROVIDER, city="Pune", country="India")
        dual = BusinessPartner(name="Bodyworks Collective", type=PartnerType.DUAL, city="Mumbai", country="India")
        institution = BusinessPartner(name="City Hospital", type=PartnerType.INSTITUTION)
        breathing = Session(
            title="Morning Breathing",
            focus_area=FocusArea.MIND,
            content_type=ContentType.AUDIO,
            duration=10,
            status=SessionStatus.PUBLISHED,
        )
        yoga = Session(
            title="Gentle Yoga Flow",
            focus_area=FocusArea.BODY,
            content_type=ContentType.VIDEO,
            duration=30,
            status=SessionStatus.PUBLISHED,
        )
        consult = Service(
            title="Nutrition Consult",
            focus_area=FocusArea.NUTRITION,
            service_type=ServiceType.TELE_CONSULT,
            default_duration=45,
            status=ServiceStatus.ACTIVE,
        )
        workshop = Service(
            title="Sleep Hygiene Workshop",
            focus_area=FocusArea.SLEEP,
            service_type=ServiceType.WORKSHOP,
            default_duration=90,
            status=ServiceStatus.APPROVED,
        )
        session.add_all([provider, dual, institution, breathing, yoga, consult, workshop])
        await session.commit()

        return {
            "provider": provider,
            "dual": dual,
            "institution": institution,
            "breathing": breathing,
            "yoga": yoga,
            "consult": consult,
            "workshop": workshop,
        }


@pytest.fixture
def program_payload(catalog) -> ProgramPayload:
    return ProgramPayload(
        title="Calm in Seven",
        short_description="A week of calming practice",
        detailed_description="Breathing, movement and a nutrition consult.",
        focus_area=FocusArea.MIND,
        tags=["calm", " stress ", "calm", ""],
        duration=7,
        provider_id=catalog["provider"].id,
        base_price=1000.0,
        offer_price=800.0,
    )


@pytest.fixture
def item_drafts(catalog) -> list[ProgramItemDraft]:
    return [
        ProgramItemDraft(asset_type="session", asset_id=catalog["breathing"].id, day_no=1, sequence_no=1, title="Breathe"),
        ProgramItemDraft(asset_type="service", asset_id=catalog["consult"].id, day_no=3, sequence_no=1, title="Consult"),
        ProgramItemDraft(asset_type="session", asset_id=catalog["yoga"].id, day_no=1, sequence_no=2, title="Stretch"),
    ]


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP client bound to the app with get_db pointed at the test database."""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
