# gst_compliance/domain/models/money.py
"""
Fixed-point currency helpers.

All stored and reported amounts are rupees with 2 decimal places.
Intermediate arithmetic runs at full Decimal precision and is rounded
once, at the point a figure becomes a stored/reported amount.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Convert int/float/str/Decimal/None to Decimal (None -> 0)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return ZERO


def round_money(value: Any) -> Decimal:
    """Round to paise (2 dp), half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Any, rate: Any) -> Decimal:
    """``amount * rate / 100`` at full precision."""
    return to_decimal(amount) * to_decimal(rate) / HUNDRED


def money_sum(values) -> Decimal:
    total = ZERO
    for v in values:
        total += to_decimal(v)
    return round_money(total)
