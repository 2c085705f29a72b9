"""Event creation service."""

import logging
from typing import Optional

from friendsbets.exceptions import LedgerValidationError, UserNotFoundError
from friendsbets.models import Event, EventStatus, generate_id, utcnow
from friendsbets.storage import LedgerStore

logger = logging.getLogger(__name__)


class EventService:
    """
    Creates events in the open state.
    Resolution is handled by resolution_service.
    """

    MAX_TITLE_LENGTH = 200
    MAX_DESCRIPTION_LENGTH = 500

    async def create_event(
        self,
        store: LedgerStore,
        title: str,
        created_by_id: str,
        description: Optional[str] = None,
    ) -> Event:
        """Create an open event owned by an existing user."""
        title = (title or "").strip()
        if not title:
            raise LedgerValidationError("Title is required")
        if len(title) > self.MAX_TITLE_LENGTH:
            raise LedgerValidationError(
                f"Title longer than {self.MAX_TITLE_LENGTH} characters"
            )
        if description is not None and len(description) > self.MAX_DESCRIPTION_LENGTH:
            raise LedgerValidationError(
                f"Description longer than {self.MAX_DESCRIPTION_LENGTH} characters"
            )

        async with store.transaction():
            creator = await store.get_user(created_by_id)
            if creator is None:
                raise UserNotFoundError(created_by_id)

            event = store.add_event(
                Event(
                    id=generate_id(),
                    title=title,
                    description=description or None,
                    created_by_id=created_by_id,
                    status=EventStatus.OPEN.value,
                    created_at=utcnow(),
                )
            )

        logger.info(f"Created event '{event.title}' ({event.id}) by {creator.display_name}")
        return event


# Singleton instance
event_service = EventService()
