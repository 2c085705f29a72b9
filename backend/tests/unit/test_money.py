"""Unit Tests: monetary amount coercion."""

from decimal import Decimal

import pytest

from friendsbets.exceptions import LedgerValidationError
from friendsbets.services.money import to_money


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("30"), Decimal("30.00")),
        ("12.5", Decimal("12.50")),
        (7, Decimal("7.00")),
        (0.1, Decimal("0.10")),
        (Decimal("0.01"), Decimal("0.01")),
    ],
)
def test_valid_amounts(value, expected):
    result = to_money(value)
    assert result == expected
    assert result.as_tuple().exponent == -2


@pytest.mark.parametrize(
    "value",
    [0, "-1", Decimal("-0.01"), "1.001", "abc", "NaN", "Infinity"],
)
def test_invalid_amounts(value):
    with pytest.raises(LedgerValidationError):
        to_money(value)
