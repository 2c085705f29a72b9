"""Services module."""

from friendsbets.services.event_service import event_service
from friendsbets.services.resolution_service import PAYOUT_MULTIPLIER, resolution_service
from friendsbets.services.trade_service import trade_service
from friendsbets.services.user_service import user_service

__all__ = [
    "event_service",
    "resolution_service",
    "PAYOUT_MULTIPLIER",
    "trade_service",
    "user_service",
]
