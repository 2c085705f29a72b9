"""Shared fixtures for ledger tests."""

import asyncio
from decimal import Decimal

import pytest

from friendsbets.config import Settings
from friendsbets.database import Database
from friendsbets.models import User, generate_id, utcnow


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        db_max_retries=3,
        db_retry_base_delay=0.0,
        logfire_token="",
    )


@pytest.fixture
def run_ledger(settings):
    """
    Run an async scenario against a freshly created database.

    Usage:
        def test_something(run_ledger):
            async def scenario(database):
                async with database.session() as session:
                    ...
            run_ledger(scenario)
    """

    def run(scenario):
        async def main():
            database = Database(settings)
            await database.create_all()
            try:
                return await scenario(database)
            finally:
                await database.dispose()

        return asyncio.run(main())

    return run


@pytest.fixture
def add_user():
    """Insert a user with an arbitrary balance and return its id."""

    async def add(store, display_name: str = "Alice", balance: str = "100.00") -> str:
        user_id = generate_id()
        async with store.transaction():
            store.add_user(
                User(
                    id=user_id,
                    display_name=display_name,
                    balance=Decimal(balance),
                    created_at=utcnow(),
                )
            )
        return user_id

    return add
