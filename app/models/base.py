import uuid
from datetime import date, datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def enum_column(enum_cls: type[PyEnum]) -> Enum:
    """Store enum values (not member names) in a plain VARCHAR column."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )


class CatalogEntity(Base):
    __abstract__ = True

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    @property
    def created_date(self) -> date | None:
        """Display date, truncated from the creation timestamp."""
        if self.created_at is None:
            return None
        return self.created_at.date()
