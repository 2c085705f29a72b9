"""Run a ledger operation in its own session, retrying transient failures."""

from typing import Awaitable, Callable, TypeVar

from friendsbets.database import Database, run_with_retry
from friendsbets.storage.ledger_store import LedgerStore

T = TypeVar("T")


async def run_ledger_operation(
    database: Database,
    operation: Callable[[LedgerStore], Awaitable[T]],
) -> T:
    """
    Execute operation(store) with a fresh session per attempt.

    Usage:
        trade = await run_ledger_operation(
            database,
            lambda store: trade_service.place_trade(store, ...),
        )
    """

    async def attempt() -> T:
        async with database.session() as session:
            return await operation(LedgerStore(session))

    return await run_with_retry(
        attempt,
        max_retries=database.settings.db_max_retries,
        base_delay=database.settings.db_retry_base_delay,
    )
