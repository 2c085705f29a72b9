"""Event database model."""

from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
)

from friendsbets.database.base import Base
from friendsbets.models.base import ID_LENGTH, CreatedAtMixin, IdMixin


class EventStatus(str, Enum):
    """Event lifecycle. open -> resolved is the only transition."""

    OPEN = "open"
    RESOLVED = "resolved"


class Event(Base, IdMixin, CreatedAtMixin):
    """A yes/no proposition open for betting until resolved."""

    __tablename__ = "events"

    title = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    created_by_id = Column(
        String(ID_LENGTH),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    # Lifecycle
    status = Column(String(20), nullable=False, default=EventStatus.OPEN.value)
    outcome = Column(Boolean, nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'resolved')",
            name="valid_status",
        ),
        CheckConstraint(
            "(status = 'open' AND outcome IS NULL AND resolved_at IS NULL) "
            "OR (status = 'resolved' AND outcome IS NOT NULL "
            "AND resolved_at IS NOT NULL)",
            name="resolution_fields",
        ),
    )

    @property
    def is_open(self) -> bool:
        return self.status == EventStatus.OPEN.value

    def __repr__(self) -> str:
        return f"<Event {self.title[:50]} ({self.status})>"
