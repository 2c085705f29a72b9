"""User database model."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Numeric, String

from friendsbets.database.base import Base
from friendsbets.models.base import CreatedAtMixin, IdMixin


class User(Base, IdMixin, CreatedAtMixin):
    """A player holding virtual balance."""

    __tablename__ = "users"

    display_name = Column(String(100), nullable=False)
    balance = Column(
        Numeric(18, 2),
        nullable=False,
        default=Decimal("100.00"),
    )

    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<User {self.display_name} (${self.balance})>"
