"""User registration service."""

import logging
from decimal import Decimal

from friendsbets.exceptions import LedgerValidationError
from friendsbets.models import User, generate_id, utcnow
from friendsbets.storage import LedgerStore

logger = logging.getLogger(__name__)


class UserService:
    """Registers users with the fixed starting balance."""

    INITIAL_BALANCE = Decimal("100.00")
    MAX_DISPLAY_NAME_LENGTH = 100

    async def create_user(self, store: LedgerStore, display_name: str) -> User:
        """Create a user with a fresh id and the starting balance."""
        display_name = (display_name or "").strip()
        if not display_name:
            raise LedgerValidationError("Display name is required")
        if len(display_name) > self.MAX_DISPLAY_NAME_LENGTH:
            raise LedgerValidationError(
                f"Display name longer than {self.MAX_DISPLAY_NAME_LENGTH} characters"
            )

        async with store.transaction():
            user = store.add_user(
                User(
                    id=generate_id(),
                    display_name=display_name,
                    balance=self.INITIAL_BALANCE,
                    created_at=utcnow(),
                )
            )

        logger.info(f"Registered user {user.display_name} ({user.id})")
        return user


# Singleton instance
user_service = UserService()
