"""
Async engine and session management.

This module provides:
- Database: owns the AsyncEngine and session factory for one process
- Session context manager with rollback on error
- Table creation and health check utilities
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from friendsbets.config import Settings
from friendsbets.database.base import Base

logger = logging.getLogger(__name__)


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # Stop the driver from issuing its own deferred BEGIN; _begin_immediate
    # emits the BEGIN instead.
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_immediate(conn) -> None:
    # Take SQLite's write lock at BEGIN so a balance or status read cannot
    # go stale before the same transaction writes.
    conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Database handle passed explicitly to whoever needs a session.

    One instance is opened at startup (API lifespan or CLI command) and
    disposed at shutdown; there is no module-level engine.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = self._create_engine(settings)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @staticmethod
    def _create_engine(settings: Settings) -> AsyncEngine:
        if settings.is_sqlite:
            engine = create_async_engine(settings.database_url, echo=settings.db_echo)
            event.listen(engine.sync_engine, "connect", _configure_sqlite_connection)
            event.listen(engine.sync_engine, "begin", _begin_immediate)
            return engine

        return create_async_engine(
            settings.database_url,
            echo=settings.db_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager for database sessions.

        Usage:
            async with database.session() as db:
                store = LedgerStore(db)
                trade = await trade_service.place_trade(store, ...)

        Yields:
            AsyncSession: SQLAlchemy async database session
        """
        session = self.session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create any missing tables."""
        # Register every model on Base.metadata before creating tables
        import friendsbets.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def check_connection(self) -> bool:
        """Check if the database connection is healthy."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    def info(self) -> dict:
        """Get database connection information with credentials hidden."""
        return {
            "url": self.engine.url.render_as_string(hide_password=True),
            "dialect": self.engine.dialect.name,
            "environment": self.settings.environment,
        }

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
