from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config.settings import get_settings
from app.models.enums import (
    AssetType,
    FocusArea,
    GenderOption,
    PlanStatus,
    PlanType,
    ProgramStatus,
    ProgramType,
)
from app.schemas.catalog import AssetDetails, normalize_tag_list

settings = get_settings()


class ProgramPayload(BaseModel):
    """Editable program fields. Business rules are checked by the service."""

    title: str = ""
    short_description: str = ""
    detailed_description: str = ""
    focus_area: FocusArea = FocusArea.MIND
    sub_focus_area: str = ""
    tags: list[str] = Field(default_factory=list)
    duration: int = settings.default_program_duration
    program_type: ProgramType = ProgramType.SEQUENTIAL
    provider_id: str = ""
    gender: GenderOption = GenderOption.ANY
    age_group: str = "Adult"
    geography: str = "Global"
    status: ProgramStatus = ProgramStatus.DRAFT
    base_price: float = 0.0
    offer_price: float | None = None
    currency: str = settings.default_currency

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str]) -> list[str]:
        return normalize_tag_list(tags)


class ProgramItemDraft(BaseModel):
    """An item in the working list; has no id until persisted."""

    model_config = ConfigDict(from_attributes=True)

    asset_type: AssetType = AssetType.SESSION
    asset_id: str = ""
    day_no: int = 1
    sequence_no: int = Field(default=1, ge=1)
    title: str = ""
    is_optional: bool = False
    completion_required: bool = True


class ProgramSaveRequest(BaseModel):
    program: ProgramPayload
    items: list[ProgramItemDraft] = Field(default_factory=list)


class ProgramResponse(ProgramPayload):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: str
    created_at: datetime
    created_date: date
    updated_at: datetime | None = None


class ProgramListEntry(ProgramResponse):
    provider_name: str = "Unknown"
    item_count: int = 0


class ProgramPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    program_id: str
    plan_type: PlanType
    sequence_order: int
    title: str | None = None
    description: str | None = None
    status: PlanStatus
    created_by: str
    created_at: datetime
    created_date: date
    updated_at: datetime | None = None


class ProgramItemResponse(ProgramItemDraft):
    id: str
    plan_id: str
    created_by: str
    created_date: date


class ProgramDetailResponse(BaseModel):
    program: ProgramResponse
    plan: ProgramPlanResponse | None = None
    items: list[ProgramItemResponse] = Field(default_factory=list)


class ProgramItemView(BaseModel):
    """Builder row: draft position in the working list plus resolved asset."""

    position: int
    item: ProgramItemDraft
    asset: AssetDetails | None = None


class ItemValidationRequest(BaseModel):
    program_duration: int
    item: ProgramItemDraft


class ItemValidationResponse(BaseModel):
    valid: bool = True


class ItemCountResponse(BaseModel):
    program_id: str
    item_count: int
