"""
Money helpers for Split Ledger.
All amounts are Decimal values with two fractional digits.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """
    Convert an incoming amount to Decimal without going through binary floats.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal representation of the value

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    elif isinstance(value, float):
        # repr() gives the shortest string that round-trips, e.g. 0.1 -> "0.1"
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def round_money(value: Any) -> Decimal:
    """Round to cents, half away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """Exact sum of Decimal amounts, starting from Decimal zero."""
    return sum(values, ZERO)


def is_zero(value: Decimal) -> bool:
    return round_money(value) == ZERO


def within_tolerance(actual: Decimal, expected: Decimal, entries: int, per_entry: Decimal = CENT) -> bool:
    """
    Check that two totals agree within a rounding tolerance.

    Args:
        actual: Computed total
        expected: Reference total
        entries: Number of rounded entries that make up ``actual``
        per_entry: Allowed drift per entry

    Returns:
        True if ``|actual - expected| <= per_entry * max(entries, 1)``
    """
    return abs(actual - expected) <= per_entry * max(entries, 1)
