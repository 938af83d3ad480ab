"""Business partner directory: providers, institutions and their centers."""
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, ValidationError
from app.core.logging import get_logger
from app.models.enums import PartnerType
from app.models.partner import BusinessPartner
from app.repositories.partner_repository import PartnerRepository
from app.schemas.partner import PartnerPayload
from app.services.base import BaseService

logger = get_logger(__name__)

ROLES_BY_TYPE: dict[PartnerType, list[str]] = {
    PartnerType.PROVIDER: ["provider"],
    PartnerType.INSTITUTION: ["institution"],
    PartnerType.CENTER: ["center"],
    PartnerType.DUAL: ["provider", "institution"],
}

REQUIRED_FIELDS = (
    ("name", "name"),
    ("contact_person", "contact person"),
    ("contact_email", "contact email"),
    ("contact_phone", "contact phone"),
    ("city", "city"),
    ("state", "state"),
    ("country", "country"),
)


def roles_for(partner_type: PartnerType) -> list[str]:
    return list(ROLES_BY_TYPE[PartnerType(partner_type)])


class PartnerDirectoryService(BaseService):
    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self._partners = PartnerRepository(session)

    async def list_partners(self, partner_type: PartnerType | None = None) -> list[BusinessPartner]:
        filter = {"type": partner_type} if partner_type else {}
        async with self._persistence_step("list_partners", commit=False, partner_type=partner_type):
            return await self._partners.list(filter)

    async def get_partner(self, partner_id: str) -> BusinessPartner:
        return await self._get_or_404(
            BusinessPartner, partner_id, f"Partner {partner_id} not found"
        )

    async def validate_partner(self, payload: PartnerPayload, partner_id: str | None = None) -> None:
        """Required contact fields, and an existing parent for centers."""
        for field, label in REQUIRED_FIELDS:
            value = getattr(payload, field)
            if not value or not value.strip():
                raise ValidationError(field, f"{label} is required")

        if payload.type != PartnerType.CENTER:
            return
        if not payload.parent_id:
            raise ValidationError("parent_id", "a center needs a parent partner")
        if payload.parent_id == partner_id:
            raise ValidationError(
                "parent_id", "a partner cannot be its own parent",
                {"field": "parent_id", "parent_id": payload.parent_id},
            )
        async with self._persistence_step("load_partner", commit=False, partner_id=payload.parent_id):
            parent = await self._partners.get(payload.parent_id)
        if parent is None:
            raise ValidationError(
                "parent_id", f"parent partner {payload.parent_id} does not exist",
                {"field": "parent_id", "parent_id": payload.parent_id},
            )

    async def save_partner(self, payload: PartnerPayload, partner_id: str | None = None) -> BusinessPartner:
        """Create or update a partner. Roles always follow the partner type."""
        if partner_id:
            await self.get_partner(partner_id)

        await self.validate_partner(payload, partner_id)

        values = payload.model_dump()
        values["roles"] = roles_for(payload.type)
        if payload.type != PartnerType.CENTER:
            values["parent_id"] = None

        async with self._persistence_step("save_partner", partner_id=partner_id):
            if partner_id:
                partner = await self._partners.update(partner_id, values)
            else:
                partner = await self._partners.create(BusinessPartner(**values))

        logger.info("partner_saved", partner_id=partner.id, type=partner.type, created=partner_id is None)
        return partner

    async def delete_partner(self, partner_id: str) -> None:
        await self.get_partner(partner_id)

        async with self._persistence_step("count_partner_centers", commit=False, partner_id=partner_id):
            children = await self._partners.count_children(partner_id)
        if children:
            raise ConflictError(
                "Cannot delete partner with associated centers",
                code="CF_PARTNER_CENTERS_001",
                details={"partner_id": partner_id, "centers": children},
            )

        async with self._persistence_step("delete_partner", partner_id=partner_id):
            await self._partners.delete(partner_id)
        logger.info("partner_deleted", partner_id=partner_id)
