"""Monetary amount handling: two-decimal fixed point."""

from decimal import Decimal, InvalidOperation

from friendsbets.exceptions import LedgerValidationError

MONEY_QUANTUM = Decimal("0.01")


def to_money(value) -> Decimal:
    """
    Coerce a trade amount to a positive two-decimal Decimal.

    Floats go through str() so 0.1 stays 0.1. Amounts with sub-cent
    precision are rejected rather than rounded.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise LedgerValidationError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise LedgerValidationError(f"Invalid amount: {value!r}")
    if amount <= 0:
        raise LedgerValidationError(f"Amount must be positive, got {amount}")
    if amount != amount.quantize(MONEY_QUANTUM):
        raise LedgerValidationError(
            f"Amount {amount} has more than two decimal places"
        )
    return amount.quantize(MONEY_QUANTUM)
