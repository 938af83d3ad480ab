"""Catalog entities referenced by program items."""
from sqlalchemy import JSON, Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import CatalogEntity, enum_column
from app.models.enums import (
    ContentType,
    FocusArea,
    GenderOption,
    ServiceStatus,
    ServiceType,
    SessionStatus,
)


class Session(CatalogEntity):
    """On-demand media content (video, audio, text or interactive)."""

    __tablename__ = "sessions"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    short_description: Mapped[str] = mapped_column(Text, default="")
    detailed_description: Mapped[str] = mapped_column(Text, default="")
    focus_area: Mapped[FocusArea] = mapped_column(enum_column(FocusArea), nullable=False)
    sub_focus_area: Mapped[str] = mapped_column(String(100), default="")
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)

    content_type: Mapped[ContentType] = mapped_column(enum_column(ContentType), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, default=0)
    language: Mapped[str] = mapped_column(String(50), default="English")
    provider_id: Mapped[str] = mapped_column(String(36), default="")
    file_url: Mapped[str] = mapped_column(String(500), default="")
    thumbnail_url: Mapped[str | None] = mapped_column(String(500))

    gender: Mapped[GenderOption] = mapped_column(enum_column(GenderOption), default=GenderOption.ANY)
    age_group: Mapped[str] = mapped_column(String(50), default="Adult")
    geography: Mapped[str] = mapped_column(String(100), default="Global")
    status: Mapped[SessionStatus] = mapped_column(enum_column(SessionStatus), default=SessionStatus.DRAFT)

    is_free: Mapped[bool] = mapped_column(Boolean, default=False)
    base_price: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str | None] = mapped_column(String(3))
    created_by: Mapped[str] = mapped_column(String(36), default="")


class Service(CatalogEntity):
    """Bookable live offering (consultation, class, workshop)."""

    __tablename__ = "services"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    short_description: Mapped[str] = mapped_column(Text, default="")
    detailed_description: Mapped[str] = mapped_column(Text, default="")
    focus_area: Mapped[FocusArea] = mapped_column(enum_column(FocusArea), nullable=False)
    sub_focus_area: Mapped[str] = mapped_column(String(100), default="")
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)

    service_type: Mapped[ServiceType] = mapped_column(enum_column(ServiceType), nullable=False)
    delivery_channel: Mapped[str] = mapped_column(String(100), default="")
    default_duration: Mapped[int] = mapped_column(Integer, default=0)
    default_capacity: Mapped[int] = mapped_column(Integer, default=1)
    qualified_roles: Mapped[str] = mapped_column(String(255), default="")
    provider_id: Mapped[str] = mapped_column(String(36), default="")
    center_id: Mapped[str | None] = mapped_column(String(36))

    gender: Mapped[GenderOption] = mapped_column(enum_column(GenderOption), default=GenderOption.ANY)
    age_group: Mapped[str] = mapped_column(String(50), default="Adult")
    geography: Mapped[str] = mapped_column(String(100), default="Global")
    status: Mapped[ServiceStatus] = mapped_column(enum_column(ServiceStatus), default=ServiceStatus.DEFINED)

    base_price: Mapped[float] = mapped_column(Float, default=0.0)
    currency: Mapped[str] = mapped_column(String(3), default="INR")
    created_by: Mapped[str] = mapped_column(String(36), default="")
