"""Schemas for the business partner directory."""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import PartnerStatus, PartnerType


class PartnerPayload(BaseModel):
    """Editable partner fields. Roles are derived from the partner type."""

    name: str = ""
    type: PartnerType = PartnerType.PROVIDER
    contact_person: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    city: str = ""
    state: str = ""
    country: str = "India"
    status: PartnerStatus = PartnerStatus.ACTIVE
    parent_id: str | None = None


class PartnerResponse(PartnerPayload):
    model_config = ConfigDict(from_attributes=True)

    id: str
    roles: list[str] = Field(default_factory=list)
    created_at: datetime
    created_date: date
