"""
FastAPI dependency injection for database sessions.
Provides database session dependencies for API endpoints.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from friendsbets.database.session import Database


def get_database(request: Request) -> Database:
    """Return the Database opened by the application lifespan."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async database session.

    Usage:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db)):
            store = LedgerStore(db)
            return await store.list_users()

    Yields:
        AsyncSession: SQLAlchemy async database session

    Ensures:
        - Session is automatically closed after the request
        - Connection is returned to the pool
    """
    async with get_database(request).session() as session:
        yield session
