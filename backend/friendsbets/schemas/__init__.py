"""Pydantic schemas for request validation and response serialization."""

from friendsbets.schemas.common import LEDGER_ERROR_RESPONSES, BaseSchema, ErrorResponse
from friendsbets.schemas.event import (
    EventCreate,
    EventResolveRequest,
    EventResponse,
    EventStatus,
)
from friendsbets.schemas.trade import PositionResponse, TradeCreate, TradeResponse
from friendsbets.schemas.user import UserCreate, UserResponse

__all__ = [
    # Common
    "BaseSchema",
    "ErrorResponse",
    "LEDGER_ERROR_RESPONSES",
    # Users
    "UserCreate",
    "UserResponse",
    # Events
    "EventCreate",
    "EventResolveRequest",
    "EventResponse",
    "EventStatus",
    # Trades and positions
    "TradeCreate",
    "TradeResponse",
    "PositionResponse",
]
