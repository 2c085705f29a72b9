"""API routes module."""

from friendsbets.api.routes.events import router as events_router
from friendsbets.api.routes.trades import router as trades_router
from friendsbets.api.routes.users import router as users_router

__all__ = [
    "events_router",
    "trades_router",
    "users_router",
]
