"""Event Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from friendsbets.models import EventStatus
from friendsbets.schemas.common import BaseSchema


class EventCreate(BaseSchema):
    """Event creation schema."""

    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    created_by_id: str = Field(min_length=1, max_length=12)


class EventResolveRequest(BaseSchema):
    """Event resolution schema."""

    outcome: bool


class EventResponse(BaseSchema):
    """Event response schema."""

    id: str
    title: str
    description: Optional[str]
    created_by_id: str
    status: EventStatus
    outcome: Optional[bool]
    created_at: datetime
    resolved_at: Optional[datetime]
