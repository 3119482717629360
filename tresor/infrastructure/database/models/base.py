"""Base model classes for database entities."""
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base model class for all database models."""
    pass


class TimestampedModel(Base):
    """Base model with timestamps."""
    __abstract__ = True
    
    # Client-side defaults keep the values loaded after flush under asyncio
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )


class UUIDModel(TimestampedModel):
    """Base model with UUID primary key and timestamps."""
    __abstract__ = True
    
    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4
    )
