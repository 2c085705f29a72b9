"""Trade placement service."""

import logging
from decimal import Decimal

from friendsbets.exceptions import (
    EventNotFoundError,
    EventNotOpenError,
    InsufficientBalanceError,
    UserNotFoundError,
)
from friendsbets.models import Trade, generate_id, utcnow
from friendsbets.services.money import to_money
from friendsbets.storage import LedgerStore

logger = logging.getLogger(__name__)


class TradeService:
    """
    Places trades: debits the user, records the trade, grows the position.
    """

    async def place_trade(
        self,
        store: LedgerStore,
        event_id: str,
        user_id: str,
        prediction: bool,
        amount: Decimal,
    ) -> Trade:
        """
        Place a trade for a user on an event.

        Checks, in order:
        1. Amount is positive with at most two decimals
        2. User exists
        3. User balance covers the amount
        4. Event exists
        5. Event is open

        Then in one transaction:
        1. Debit user balance
        2. Insert the trade record
        3. Upsert the (event, user, prediction) position
        """
        amount = to_money(amount)

        async with store.transaction():
            # Event before user: resolution locks the event row and then
            # credits user rows, so both paths acquire in the same order.
            event = await store.get_event(event_id, for_share=True)
            user = await store.get_user(user_id, for_update=True)

            if user is None:
                raise UserNotFoundError(user_id)

            if user.balance < amount:
                raise InsufficientBalanceError(user_id, user.balance, amount)

            if event is None:
                raise EventNotFoundError(event_id)

            if not event.is_open:
                raise EventNotOpenError(event_id)

            user.balance -= amount

            trade = store.add_trade(
                Trade(
                    id=generate_id(),
                    event_id=event_id,
                    user_id=user_id,
                    prediction=prediction,
                    amount=amount,
                    created_at=utcnow(),
                )
            )

            position = await store.upsert_position(
                event_id, user_id, prediction, amount
            )

        logger.info(
            f"Placed trade {trade.id}: {user.display_name} "
            f"{'YES' if prediction else 'NO'} ${amount} on '{event.title}' "
            f"(position ${position.amount}, balance ${user.balance})"
        )
        return trade


# Singleton instance
trade_service = TradeService()
