"""
Unit Tests: user registration and event creation

Test cases:
- Users start with the fixed 100.00 balance and a 12-char id
- Events start open with no outcome
- Input validation and unknown creators
- Event status serialized with the stored values
"""

from decimal import Decimal

import pytest

from friendsbets import models, schemas
from friendsbets.exceptions import LedgerValidationError, UserNotFoundError
from friendsbets.services import event_service, user_service
from friendsbets.storage import LedgerStore


def test_create_user_starts_with_fixed_balance(run_ledger):
    async def scenario(database):
        async with database.session() as session:
            store = LedgerStore(session)
            user = await user_service.create_user(store, "  Alice  ")

            assert len(user.id) == 12
            assert user.display_name == "Alice"
            assert user.balance == Decimal("100.00")

        async with database.session() as session:
            stored = await LedgerStore(session).get_user(user.id)
            assert stored.balance == Decimal("100.00")

    run_ledger(scenario)


@pytest.mark.parametrize("name", ["", "   ", "x" * 101])
def test_create_user_rejects_bad_names(run_ledger, name):
    async def scenario(database):
        async with database.session() as session:
            with pytest.raises(LedgerValidationError):
                await user_service.create_user(LedgerStore(session), name)

    run_ledger(scenario)


def test_create_event_starts_open(run_ledger):
    async def scenario(database):
        async with database.session() as session:
            store = LedgerStore(session)
            user = await user_service.create_user(store, "Alice")
            event = await event_service.create_event(
                store,
                title="Will Bob show up on time?",
                created_by_id=user.id,
                description="Dinner at 7",
            )

            assert len(event.id) == 12
            assert event.status == "open"
            assert event.outcome is None
            assert event.resolved_at is None
            assert event.description == "Dinner at 7"
            assert event.created_by_id == user.id

    run_ledger(scenario)


def test_create_event_requires_existing_creator(run_ledger):
    async def scenario(database):
        async with database.session() as session:
            with pytest.raises(UserNotFoundError):
                await event_service.create_event(
                    LedgerStore(session), title="Orphan", created_by_id="nosuchuser00"
                )

    run_ledger(scenario)


def test_create_event_requires_title(run_ledger):
    async def scenario(database):
        async with database.session() as session:
            store = LedgerStore(session)
            user = await user_service.create_user(store, "Alice")
            with pytest.raises(LedgerValidationError):
                await event_service.create_event(store, title=" ", created_by_id=user.id)

    run_ledger(scenario)


def test_event_response_status_uses_model_enum(run_ledger):
    assert schemas.EventStatus is models.EventStatus

    async def scenario(database):
        async with database.session() as session:
            store = LedgerStore(session)
            user = await user_service.create_user(store, "Alice")
            event = await event_service.create_event(
                store, title="Rain tomorrow?", created_by_id=user.id
            )
            return schemas.EventResponse.model_validate(event)

    response = run_ledger(scenario)
    assert response.status is models.EventStatus.OPEN
    assert response.model_dump(by_alias=True)["status"] == "open"
