"""Enumerations shared by catalog models and API schemas."""
from enum import Enum


class FocusArea(str, Enum):
    MIND = "Mind"
    BODY = "Body"
    NUTRITION = "Nutrition"
    SLEEP = "Sleep"
    GENERAL_WELLNESS = "General Wellness"


class GenderOption(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    ANY = "Any"


class ProgramType(str, Enum):
    SEQUENTIAL = "sequential"
    MODULAR = "modular"


class ProgramStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PlanType(str, Enum):
    DAY = "Day"
    STEP = "Step"

    @classmethod
    def for_program_type(cls, program_type: ProgramType) -> "PlanType":
        return cls.DAY if program_type == ProgramType.SEQUENTIAL else cls.STEP


class PlanStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AssetType(str, Enum):
    SESSION = "session"
    SERVICE = "service"


class ContentType(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    TEXT = "text"
    INTERACTIVE = "interactive"


class SessionStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ServiceType(str, Enum):
    TELE_CONSULT = "tele-consult"
    IN_PERSON = "in-person"
    HYBRID = "hybrid"
    GROUP_CLASS = "group-class"
    WORKSHOP = "workshop"


class ServiceStatus(str, Enum):
    DEFINED = "defined"
    VALIDATED = "validated"
    APPROVED = "approved"
    ACTIVE = "active"
    RETIRED = "retired"


class PartnerType(str, Enum):
    PROVIDER = "provider"
    INSTITUTION = "institution"
    CENTER = "center"
    DUAL = "dual"


class PartnerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
