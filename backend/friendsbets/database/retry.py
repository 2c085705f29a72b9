"""Retry of whole ledger operations on transient database failures."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL deadlock_detected and serialization_failure
RETRYABLE_SQLSTATES = {"40P01", "40001"}


def _sqlstate(error: DBAPIError):
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_transient(error: Exception) -> bool:
    """Whether an error is worth retrying with a fresh session."""
    if isinstance(error, (OperationalError, InterfaceError)):
        return True
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        if _sqlstate(error) in RETRYABLE_SQLSTATES:
            return True
    return False


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 5,
    base_delay: float = 0.5,
) -> T:
    """
    Run an async operation, retrying transient database errors.

    The operation must open its own session so that every attempt starts
    from a clean transaction. Ledger errors and anything non-transient
    propagate on the first occurrence.
    """
    retry_count = 0

    while True:
        try:
            return await operation()
        except DBAPIError as e:
            if not is_transient(e):
                raise
            retry_count += 1
            if retry_count >= max_retries:
                logger.error(
                    f"Database operation failed after {retry_count} attempts: {e}"
                )
                raise
            wait_time = base_delay * 2 ** (retry_count - 1)
            logger.warning(
                f"Transient database error, retrying in {wait_time}s "
                f"({retry_count}/{max_retries - 1}): {e}"
            )
            await asyncio.sleep(wait_time)
