"""Event resolution and payout service."""

import logging
from decimal import Decimal

from friendsbets.exceptions import EventAlreadyResolvedError, EventNotFoundError
from friendsbets.models import Event, utcnow
from friendsbets.storage import LedgerStore

logger = logging.getLogger(__name__)

# Winners are paid from an implicit pool, not from the losing stakes.
PAYOUT_MULTIPLIER = Decimal("2")


class ResolutionService:
    """
    Fixes an event's outcome and pays out winning positions.
    """

    def calculate_payout(self, amount: Decimal) -> Decimal:
        """Credit owed to a winning position."""
        return amount * PAYOUT_MULTIPLIER

    async def resolve_event(
        self,
        store: LedgerStore,
        event_id: str,
        outcome: bool,
    ) -> Event:
        """
        Resolve an open event.

        Process:
        1. Transition the event open -> resolved with the outcome
        2. Credit amount * 2 to the holder of every position on the winning side
        3. Leave losing positions alone; their stake was taken at trade time

        Positions are not modified. A winning position whose user no longer
        exists is skipped and logged; the rest of the settlement proceeds.
        """
        async with store.transaction():
            transitioned = await store.mark_event_resolved(event_id, outcome, utcnow())
            if not transitioned:
                existing = await store.get_event(event_id)
                if existing is None:
                    raise EventNotFoundError(event_id)
                raise EventAlreadyResolvedError(event_id)

            positions = await store.list_positions_for_event(event_id)

            winners_paid = 0
            total_paid = Decimal("0.00")
            orphaned = 0

            for position in positions:
                if position.prediction != outcome:
                    continue

                payout = self.calculate_payout(position.amount)
                credited = await store.credit_user(position.user_id, payout)
                if not credited:
                    orphaned += 1
                    logger.warning(
                        f"Skipping payout of ${payout} for position {position.id}: "
                        f"user {position.user_id} not found (event {event_id})"
                    )
                    continue

                winners_paid += 1
                total_paid += payout

            event = await store.get_event(event_id)

        logger.info(
            f"Resolved event '{event.title}' ({event_id}) as "
            f"{'YES' if outcome else 'NO'}: {len(positions)} positions, "
            f"{winners_paid} paid, ${total_paid} credited, {orphaned} skipped"
        )
        return event


# Singleton instance
resolution_service = ResolutionService()
