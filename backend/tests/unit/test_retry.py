"""Unit Tests: transient database retry."""

import asyncio

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from friendsbets.database import is_transient, run_with_retry
from friendsbets.exceptions import InsufficientBalanceError


def _operational() -> OperationalError:
    return OperationalError("UPDATE users", {}, Exception("database is locked"))


def test_transient_classification():
    assert is_transient(_operational())
    assert is_transient(
        DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True)
    )
    assert not is_transient(IntegrityError("INSERT", {}, Exception("duplicate")))


def test_retries_until_success():
    attempts = []

    async def operation():
        attempts.append(1)
        if len(attempts) < 3:
            raise _operational()
        return "done"

    result = asyncio.run(run_with_retry(operation, max_retries=5, base_delay=0))

    assert result == "done"
    assert len(attempts) == 3


def test_gives_up_after_max_retries():
    attempts = []

    async def operation():
        attempts.append(1)
        raise _operational()

    with pytest.raises(OperationalError):
        asyncio.run(run_with_retry(operation, max_retries=3, base_delay=0))

    assert len(attempts) == 3


def test_non_transient_errors_are_not_retried():
    attempts = []

    async def operation():
        attempts.append(1)
        raise IntegrityError("INSERT", {}, Exception("duplicate"))

    with pytest.raises(IntegrityError):
        asyncio.run(run_with_retry(operation, max_retries=3, base_delay=0))

    assert len(attempts) == 1


def test_ledger_errors_are_not_retried():
    attempts = []

    async def operation():
        attempts.append(1)
        raise InsufficientBalanceError("u1", "1.00", "2.00")

    with pytest.raises(InsufficientBalanceError):
        asyncio.run(run_with_retry(operation, max_retries=3, base_delay=0))

    assert len(attempts) == 1


class _PgError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate


def test_deadlock_and_serialization_failures_are_transient():
    assert is_transient(DBAPIError("UPDATE users", {}, _PgError("40P01")))
    assert is_transient(DBAPIError("UPDATE events", {}, _PgError("40001")))
    assert not is_transient(DBAPIError("INSERT", {}, _PgError("23505")))


def test_deadlock_is_retried():
    attempts = []

    async def operation():
        attempts.append(1)
        if len(attempts) == 1:
            raise DBAPIError("UPDATE users", {}, _PgError("40P01"))
        return "done"

    result = asyncio.run(run_with_retry(operation, max_retries=3, base_delay=0))

    assert result == "done"
    assert len(attempts) == 2
