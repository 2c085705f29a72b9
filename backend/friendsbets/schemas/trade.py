"""Trade and position Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from friendsbets.schemas.common import BaseSchema


class TradeCreate(BaseSchema):
    """Trade placement schema."""

    event_id: str = Field(min_length=1, max_length=12)
    user_id: str = Field(min_length=1, max_length=12)
    prediction: bool
    amount: Decimal = Field(gt=0, decimal_places=2)


class TradeResponse(BaseSchema):
    """Trade response schema."""

    id: str
    event_id: str
    user_id: str
    prediction: bool
    amount: Decimal
    created_at: datetime


class PositionResponse(BaseSchema):
    """Position response schema."""

    id: str
    event_id: str
    user_id: str
    prediction: bool
    amount: Decimal
