"""Ledger exceptions raised by the trade and resolution engines."""


class LedgerError(Exception):
    """Base exception for ledger operations."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(LedgerError):
    """Referenced record does not exist."""

    status_code = 404


class UserNotFoundError(NotFoundError):
    """User lookup missed."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class EventNotFoundError(NotFoundError):
    """Event lookup missed."""

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class InvalidStateError(LedgerError):
    """Operation not allowed in the event's current status."""

    status_code = 409


class EventNotOpenError(InvalidStateError):
    """Trade placed on an event that is no longer open."""

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} is not open for trading")
        self.event_id = event_id


class EventAlreadyResolvedError(InvalidStateError):
    """Resolution attempted on an event that was already resolved."""

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} is already resolved")
        self.event_id = event_id


class InsufficientBalanceError(LedgerError):
    """User balance does not cover the trade amount."""

    def __init__(self, user_id: str, balance, amount):
        super().__init__(
            f"Insufficient balance: ${balance} < ${amount}"
        )
        self.user_id = user_id
        self.balance = balance
        self.amount = amount


class LedgerValidationError(LedgerError):
    """Malformed input such as a non-positive amount."""

    status_code = 422
