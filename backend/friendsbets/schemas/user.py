"""User Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from friendsbets.schemas.common import BaseSchema


class UserCreate(BaseSchema):
    """User registration schema."""

    display_name: str = Field(min_length=1, max_length=100)


class UserResponse(BaseSchema):
    """User response schema."""

    id: str
    display_name: str
    balance: Decimal
    created_at: datetime
