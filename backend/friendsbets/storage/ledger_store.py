"""
LedgerStore

Persistence for users, events, trades and positions over one AsyncSession.

The store enforces what the schema enforces (keys, uniqueness, foreign keys)
and nothing more. Business rules live in the services that call it.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from friendsbets.models import Event, EventStatus, Position, Trade, User, generate_id

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class LedgerStore:
    """Ledger persistence bound to a single session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def dialect_name(self) -> str:
        return self.session.bind.dialect.name

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["LedgerStore"]:
        """Commit everything done inside the block, or roll all of it back."""
        try:
            yield self
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self, user: User) -> User:
        self.session.add(user)
        return user

    async def get_user(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Fetch a user, optionally taking a row lock for a balance change."""
        query = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.display_name))
        return list(result.scalars().all())

    async def credit_user(self, user_id: str, amount: Decimal) -> bool:
        """
        Add to a user's balance in one statement.

        Returns False when no user row matched.
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_event(self, event: Event) -> Event:
        self.session.add(event)
        return event

    async def get_event(self, event_id: str, for_share: bool = False) -> Optional[Event]:
        """
        Fetch an event.

        for_share takes a shared row lock so a concurrent resolution waits
        until the caller's transaction ends.
        """
        query = (
            select(Event)
            .where(Event.id == event_id)
            .execution_options(populate_existing=True)
        )
        if for_share:
            query = query.with_for_update(read=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_events(self) -> list[Event]:
        result = await self.session.execute(
            select(Event).order_by(Event.created_at.desc())
        )
        return list(result.scalars().all())

    async def mark_event_resolved(
        self,
        event_id: str,
        outcome: bool,
        resolved_at: datetime,
    ) -> bool:
        """
        Move an event from open to resolved.

        The status check and the write are one UPDATE, so of two concurrent
        callers only one sees True.
        """
        result = await self.session.execute(
            update(Event)
            .where(Event.id == event_id)
            .where(Event.status == EventStatus.OPEN.value)
            .values(
                status=EventStatus.RESOLVED.value,
                outcome=outcome,
                resolved_at=resolved_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # ------------------------------------------------------------------
    # Trades
    # ------------------------------------------------------------------

    def add_trade(self, trade: Trade) -> Trade:
        self.session.add(trade)
        return trade

    async def list_recent_trades(self, limit: int = 50) -> list[Trade]:
        result = await self.session.execute(
            select(Trade).order_by(Trade.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def list_trades_for_event(self, event_id: str) -> list[Trade]:
        result = await self.session.execute(
            select(Trade)
            .where(Trade.event_id == event_id)
            .order_by(Trade.created_at.desc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    async def get_position(
        self,
        event_id: str,
        user_id: str,
        prediction: bool,
        for_update: bool = False,
    ) -> Optional[Position]:
        query = (
            select(Position)
            .where(Position.event_id == event_id)
            .where(Position.user_id == user_id)
            .where(Position.prediction == prediction)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def upsert_position(
        self,
        event_id: str,
        user_id: str,
        prediction: bool,
        amount: Decimal,
    ) -> Position:
        """
        Add amount to the (event, user, prediction) position, creating it if absent.

        On PostgreSQL and SQLite this is a single INSERT ... ON CONFLICT DO
        UPDATE against the unique key. Other backends fall back to a locked
        read followed by an update or insert.
        """
        await self.session.flush()

        insert_fn = UPSERT_DIALECTS.get(self.dialect_name)
        if insert_fn is not None:
            stmt = insert_fn(Position).values(
                id=generate_id(),
                event_id=event_id,
                user_id=user_id,
                prediction=prediction,
                amount=amount,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["event_id", "user_id", "prediction"],
                set_={"amount": Position.amount + stmt.excluded.amount},
            )
            await self.session.execute(stmt)
        else:
            position = await self.get_position(
                event_id, user_id, prediction, for_update=True
            )
            if position is not None:
                position.amount += amount
            else:
                self.session.add(
                    Position(
                        id=generate_id(),
                        event_id=event_id,
                        user_id=user_id,
                        prediction=prediction,
                        amount=amount,
                    )
                )
            await self.session.flush()

        return await self.get_position(event_id, user_id, prediction)

    async def list_positions(self) -> list[Position]:
        result = await self.session.execute(select(Position))
        return list(result.scalars().all())

    async def list_positions_for_event(self, event_id: str) -> list[Position]:
        result = await self.session.execute(
            select(Position)
            .where(Position.event_id == event_id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_positions_for_user(self, user_id: str) -> list[Position]:
        result = await self.session.execute(
            select(Position)
            .where(Position.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
