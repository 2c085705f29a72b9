"""Base model utilities for SQLAlchemy."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, String

ID_LENGTH = 12


def generate_id() -> str:
    """Random 12-character identifier. Unique in practice, not guaranteed."""
    return uuid4().hex[:ID_LENGTH]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdMixin:
    """Mixin that adds a short opaque string primary key."""

    id = Column(
        String(ID_LENGTH),
        primary_key=True,
        default=generate_id,
        nullable=False,
        comment="Unique identifier"
    )


class CreatedAtMixin:
    """Mixin that adds an application-side created_at timestamp."""

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the record was created"
    )
