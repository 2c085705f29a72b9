"""Trade database model."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Numeric,
    String,
)

from friendsbets.database.base import Base
from friendsbets.models.base import ID_LENGTH, CreatedAtMixin, IdMixin


class Trade(Base, IdMixin, CreatedAtMixin):
    """Individual bet record. Rows are never updated once written."""

    __tablename__ = "trades"

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
    amount = Column(Numeric(18, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="positive_amount"),
        Index("idx_trades_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        side = "YES" if self.prediction else "NO"
        return f"<Trade {side} ${self.amount} on {self.event_id}>"
