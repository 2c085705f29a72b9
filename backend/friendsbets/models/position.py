"""Position database model."""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)

from friendsbets.database.base import Base
from friendsbets.models.base import ID_LENGTH, IdMixin


class Position(Base, IdMixin):
    """Running total of a user's trades on one side of one event."""

    __tablename__ = "positions"

    event_id = Column(
        String(ID_LENGTH),
        ForeignKey("events.id"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(ID_LENGTH),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    prediction = Column(Boolean, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False, default=Decimal("0.00"))

    __table_args__ = (
        UniqueConstraint(
            "event_id",
            "user_id",
            "prediction",
            name="uq_positions_event_user_prediction",
        ),
        CheckConstraint("amount >= 0", name="non_negative_amount"),
    )

    def __repr__(self) -> str:
        side = "YES" if self.prediction else "NO"
        return f"<Position {self.user_id} {side} ${self.amount} on {self.event_id}>"
