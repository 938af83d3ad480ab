"""
Session and service catalog management.

Covers the available-assets panel of the program editor (title search),
create/edit/delete of sessions and services, the provider list and the
dashboard counts. Deleting an asset does not touch program items that
reference it; those items render without asset details afterwards.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import get_settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models.catalog import Service, Session
from app.models.partner import BusinessPartner
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.partner_repository import PartnerRepository
from app.repositories.program_repository import ProgramRepository
from app.schemas.catalog import (
    CatalogCounts,
    ServiceAsset,
    ServicePayload,
    SessionAsset,
    SessionPayload,
)
from app.services.base import BaseService

logger = get_logger(__name__)
settings = get_settings()


def _require(value: str | None, field: str, label: str) -> None:
    if not value or not value.strip():
        raise ValidationError(field, f"{label} is required")


class CatalogService(BaseService):
    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self._catalog = CatalogRepository(session)
        self._partners = PartnerRepository(session)
        self._programs = ProgramRepository(session)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def list_sessions(self, search: str | None = None) -> list[SessionAsset]:
        """Sessions ordered by title, optionally filtered by a title substring."""
        async with self._persistence_step("list_sessions", commit=False, search=search):
            sessions = await self._catalog.list_sessions(search)
        return [SessionAsset.model_validate(s) for s in sessions]

    async def get_session(self, session_id: str) -> Session:
        return await self._get_or_404(Session, session_id, f"Session {session_id} not found")

    def validate_session(self, payload: SessionPayload) -> None:
        """Required fields, a positive duration and a price for paid content."""
        _require(payload.title, "title", "title")
        _require(payload.short_description, "short_description", "short description")
        _require(payload.provider_id, "provider_id", "provider")
        _require(payload.file_url, "file_url", "file url")
        if payload.duration <= 0:
            raise ValidationError(
                "duration", "duration must be a positive number of minutes",
                {"field": "duration", "duration": payload.duration},
            )
        if not payload.is_free and (payload.base_price is None or payload.base_price <= 0):
            raise ValidationError(
                "base_price", "paid content needs a price above zero",
                {"field": "base_price", "base_price": payload.base_price},
            )

    async def save_session(
        self,
        payload: SessionPayload,
        session_id: str | None = None,
        acting_user_id: str | None = None,
    ) -> Session:
        """Create a session, or overwrite every editable field of an existing one."""
        existing = None
        if session_id:
            existing = await self.get_session(session_id)

        self.validate_session(payload)

        async with self._persistence_step("save_session", session_id=session_id):
            if existing is not None:
                session = await self._catalog.update_asset(existing, payload.model_dump())
            else:
                session = await self._catalog.create_asset(
                    Session(**payload.model_dump(), created_by=acting_user_id or settings.default_user_id)
                )

        logger.info("session_saved", session_id=session.id, created=existing is None)
        return session

    async def delete_session(self, session_id: str) -> None:
        session = await self.get_session(session_id)
        async with self._persistence_step("delete_session", session_id=session_id):
            await self._catalog.delete_asset(session)
        logger.info("session_deleted", session_id=session_id)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    async def list_services(self, search: str | None = None) -> list[ServiceAsset]:
        async with self._persistence_step("list_services", commit=False, search=search):
            services = await self._catalog.list_services(search)
        return [ServiceAsset.model_validate(s) for s in services]

    async def get_service(self, service_id: str) -> Service:
        return await self._get_or_404(Service, service_id, f"Service {service_id} not found")

    def validate_service(self, payload: ServicePayload) -> None:
        _require(payload.title, "title", "title")
        _require(payload.short_description, "short_description", "short description")
        _require(payload.provider_id, "provider_id", "provider")
        _require(payload.delivery_channel, "delivery_channel", "delivery channel")
        _require(payload.qualified_roles, "qualified_roles", "qualified roles")
        if payload.default_duration <= 0:
            raise ValidationError(
                "default_duration", "default duration must be a positive number of minutes",
                {"field": "default_duration", "default_duration": payload.default_duration},
            )
        if payload.default_capacity <= 0:
            raise ValidationError(
                "default_capacity", "default capacity must be at least 1",
                {"field": "default_capacity", "default_capacity": payload.default_capacity},
            )
        if payload.base_price < 0:
            raise ValidationError(
                "base_price", "base price must not be negative",
                {"field": "base_price", "base_price": payload.base_price},
            )

    async def save_service(
        self,
        payload: ServicePayload,
        service_id: str | None = None,
        acting_user_id: str | None = None,
    ) -> Service:
        existing = None
        if service_id:
            existing = await self.get_service(service_id)

        self.validate_service(payload)

        async with self._persistence_step("save_service", service_id=service_id):
            if existing is not None:
                service = await self._catalog.update_asset(existing, payload.model_dump())
            else:
                service = await self._catalog.create_asset(
                    Service(**payload.model_dump(), created_by=acting_user_id or settings.default_user_id)
                )

        logger.info("service_saved", service_id=service.id, created=existing is None)
        return service

    async def delete_service(self, service_id: str) -> None:
        service = await self.get_service(service_id)
        async with self._persistence_step("delete_service", service_id=service_id):
            await self._catalog.delete_asset(service)
        logger.info("service_deleted", service_id=service_id)

    # ------------------------------------------------------------------
    # Providers and dashboard
    # ------------------------------------------------------------------

    async def list_providers(self) -> list[BusinessPartner]:
        async with self._persistence_step("list_providers", commit=False):
            return await self._partners.list_providers()

    async def counts(self) -> CatalogCounts:
        """Dashboard totals."""
        async with self._persistence_step("count_catalog", commit=False):
            return CatalogCounts(
                sessions=await self._catalog.count_sessions(),
                services=await self._catalog.count_services(),
                programs=await self._programs.count(),
            )
