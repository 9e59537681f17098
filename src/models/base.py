"""Declarative base and shared column mixins."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.entities import utcnow


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class StringIdMixin:
    """Client-assigned string primary key."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True)


class CreatedAtMixin:
    """Creation timestamp, indexed for newest-first listings."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
