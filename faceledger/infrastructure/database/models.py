"""SQLAlchemy models for the face ledger service."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Identity(Base):
    """Enrolled identity with its serialized face descriptor."""

    __tablename__ = "faces"
    # Never reuse the id of a deleted row
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    descriptor: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="JSON encoded descriptor vector"
    )
    dimension: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of components in the descriptor"
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
    source_reference: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="Path or key of the enrollment image"
    )


class RecognitionLog(Base):
    """One recognition attempt. Rows are only ever inserted."""

    __tablename__ = "recognition_logs"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    matched_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Nearest identity name at the time of the attempt, not a foreign key"
    )
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    matched: Mapped[bool] = mapped_column(Boolean, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
