from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import CatalogEntity, enum_column
from app.models.enums import PartnerStatus, PartnerType


class BusinessPartner(CatalogEntity):
    """Provider, institution or center. Centers hang off a parent partner."""

    __tablename__ = "business_partners"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[PartnerType] = mapped_column(enum_column(PartnerType), nullable=False)
    roles: Mapped[list[str]] = mapped_column(JSON, default=list)

    contact_person: Mapped[str] = mapped_column(String(255), default="")
    contact_email: Mapped[str] = mapped_column(String(255), default="")
    contact_phone: Mapped[str] = mapped_column(String(50), default="")
    city: Mapped[str] = mapped_column(String(100), default="")
    state: Mapped[str] = mapped_column(String(100), default="")
    country: Mapped[str] = mapped_column(String(100), default="")

    status: Mapped[PartnerStatus] = mapped_column(enum_column(PartnerStatus), default=PartnerStatus.ACTIVE)
    parent_id: Mapped[str | None] = mapped_column(String(36))
