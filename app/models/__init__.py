"""ORM models. Importing this package registers every table on Base.metadata."""
from app.models.catalog import Service, Session
from app.models.enums import (
    AssetType,
    ContentType,
    FocusArea,
    GenderOption,
    PartnerStatus,
    PartnerType,
    PlanStatus,
    PlanType,
    ProgramStatus,
    ProgramType,
    ServiceStatus,
    ServiceType,
    SessionStatus,
)
from app.models.partner import BusinessPartner
from app.models.program import Program, ProgramItem, ProgramPlan

__all__ = [
    "AssetType",
    "BusinessPartner",
    "ContentType",
    "FocusArea",
    "GenderOption",
    "PartnerStatus",
    "PartnerType",
    "PlanStatus",
    "PlanType",
    "Program",
    "ProgramItem",
    "ProgramPlan",
    "ProgramStatus",
    "ProgramType",
    "Service",
    "ServiceStatus",
    "ServiceType",
    "Session",
    "SessionStatus",
]
