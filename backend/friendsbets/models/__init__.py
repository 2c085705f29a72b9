"""Database models module."""

from friendsbets.models.base import generate_id, utcnow
from friendsbets.models.event import Event, EventStatus
from friendsbets.models.position import Position
from friendsbets.models.trade import Trade
from friendsbets.models.user import User

__all__ = [
    "Event",
    "EventStatus",
    "Position",
    "Trade",
    "User",
    "generate_id",
    "utcnow",
]
