"""Schemas for the session/service catalogs and the partner directory."""
from datetime import date, datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config.settings import get_settings
from app.models.enums import (
    AssetType,
    ContentType,
    FocusArea,
    GenderOption,
    PartnerStatus,
    PartnerType,
    ServiceStatus,
    ServiceType,
    SessionStatus,
)

settings = get_settings()


def normalize_tag_list(tags: list[str]) -> list[str]:
    """Trim tags, drop blanks and duplicates, keep first-seen order."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class SessionAsset(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    asset_type: Literal[AssetType.SESSION] = AssetType.SESSION
    id: str
    title: str
    focus_area: FocusArea
    content_type: ContentType
    duration: int = 0
    status: SessionStatus


class ServiceAsset(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    asset_type: Literal[AssetType.SERVICE] = AssetType.SERVICE
    id: str
    title: str
    focus_area: FocusArea
    service_type: ServiceType
    default_duration: int = 0
    status: ServiceStatus


# Tagged union: asset_type selects the variant
AssetDetails = Annotated[Union[SessionAsset, ServiceAsset], Field(discriminator="asset_type")]


class SessionPayload(BaseModel):
    """Editable session fields. Required fields are checked by the service."""

    title: str = ""
    short_description: str = ""
    detailed_description: str = ""
    focus_area: FocusArea = FocusArea.MIND
    sub_focus_area: str = ""
    tags: list[str] = Field(default_factory=list)
    content_type: ContentType = ContentType.VIDEO
    duration: int = 0
    language: str = "English"
    provider_id: str = ""
    file_url: str = ""
    thumbnail_url: str | None = None
    gender: GenderOption = GenderOption.ANY
    age_group: str = "Adult"
    geography: str = "Global"
    status: SessionStatus = SessionStatus.DRAFT
    is_free: bool = False
    base_price: float | None = None
    currency: str = settings.default_currency

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str]) -> list[str]:
        return normalize_tag_list(tags)


class SessionResponse(SessionPayload):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    created_at: datetime
    created_date: date


class ServicePayload(BaseModel):
    """Editable service fields. Required fields are checked by the service."""

    title: str = ""
    short_description: str = ""
    detailed_description: str = ""
    focus_area: FocusArea = FocusArea.MIND
    sub_focus_area: str = ""
    tags: list[str] = Field(default_factory=list)
    service_type: ServiceType = ServiceType.TELE_CONSULT
    delivery_channel: str = ""
    default_duration: int = 0
    default_capacity: int = 1
    qualified_roles: str = ""
    provider_id: str = ""
    center_id: str | None = None
    gender: GenderOption = GenderOption.ANY
    age_group: str = "Adult"
    geography: str = "Global"
    status: ServiceStatus = ServiceStatus.DEFINED
    base_price: float = 0.0
    currency: str = settings.default_currency

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str]) -> list[str]:
        return normalize_tag_list(tags)


class ServiceResponse(ServicePayload):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    created_at: datetime
    created_date: date


class ProviderSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: PartnerType
    city: str = ""
    country: str = ""
    status: PartnerStatus


class CatalogCounts(BaseModel):
    sessions: int
    services: int
    programs: int
