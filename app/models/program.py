from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import CatalogEntity, enum_column
from app.models.enums import (
    AssetType,
    FocusArea,
    GenderOption,
    PlanStatus,
    PlanType,
    ProgramStatus,
    ProgramType,
)


class Program(CatalogEntity):
    """Multi-day offering; its schedule lives in the active ProgramPlan."""

    __tablename__ = "programs"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    detailed_description: Mapped[str] = mapped_column(Text, default="")
    focus_area: Mapped[FocusArea] = mapped_column(enum_column(FocusArea), nullable=False)
    sub_focus_area: Mapped[str] = mapped_column(String(100), default="")
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)

    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    program_type: Mapped[ProgramType] = mapped_column(enum_column(ProgramType), nullable=False)
    provider_id: Mapped[str] = mapped_column(String(36), nullable=False)

    gender: Mapped[GenderOption] = mapped_column(enum_column(GenderOption), default=GenderOption.ANY)
    age_group: Mapped[str] = mapped_column(String(50), default="Adult")
    geography: Mapped[str] = mapped_column(String(100), default="Global")
    status: Mapped[ProgramStatus] = mapped_column(enum_column(ProgramStatus), default=ProgramStatus.DRAFT)

    base_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    offer_price: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="INR")

    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class ProgramPlan(CatalogEntity):
    """Execution plan of a program. At most one per program is active."""

    __tablename__ = "program_plans"

    program_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    plan_type: Mapped[PlanType] = mapped_column(enum_column(PlanType), nullable=False)
    sequence_order: Mapped[int] = mapped_column(Integer, default=1)
    title: Mapped[str | None] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[PlanStatus] = mapped_column(enum_column(PlanStatus), default=PlanStatus.ACTIVE)

    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index(
            "uq_program_plans_active_program",
            "program_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )


class ProgramItem(CatalogEntity):
    """A session or service scheduled on a day of a plan."""

    __tablename__ = "program_items"

    plan_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("program_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    asset_type: Mapped[AssetType] = mapped_column(enum_column(AssetType), nullable=False)
    asset_id: Mapped[str] = mapped_column(String(36), nullable=False)
    day_no: Mapped[int] = mapped_column(Integer, nullable=False)
    sequence_no: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    is_optional: Mapped[bool] = mapped_column(Boolean, default=False)
    completion_required: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)

    __table_args__ = (
        Index("ix_program_items_plan_day_seq", "plan_id", "day_no", "sequence_no"),
    )
