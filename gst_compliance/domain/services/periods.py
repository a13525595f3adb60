# gst_compliance/domain/services/periods.py
"""Filing-period keys: ``MMYYYY`` (e.g. ``032025`` for March 2025)."""

from __future__ import annotations

import re
from calendar import monthrange
from datetime import date

_PERIOD_RE = re.compile(r"(0[1-9]|1[0-2])(\d{4})")

# due dates can fall in the year after the period
MIN_YEAR, MAX_YEAR = 1900, 9998


class InvalidPeriodError(ValueError):
    """Raised when a period key is not a valid MMYYYY string."""
    pass


def parse_period_key(period: str) -> tuple[int, int]:
    """``"032025"`` → ``(3, 2025)``."""
    m = _PERIOD_RE.fullmatch(period or "")
    if not m:
        raise InvalidPeriodError(f"Invalid period '{period}': expected MMYYYY")
    month, year = int(m.group(1)), int(m.group(2))
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidPeriodError(f"Invalid period '{period}': year must be {MIN_YEAR}-{MAX_YEAR}")
    return month, year


def is_valid_period_key(period: str) -> bool:
    try:
        parse_period_key(period)
    except InvalidPeriodError:
        return False
    return True


def format_period_key(d: date) -> str:
    return f"{d.month:02d}{d.year:04d}"


def current_period_key(today: date | None = None) -> str:
    return format_period_key(today or date.today())


def period_date_range(period: str) -> tuple[date, date]:
    """Return (first_day, last_day) of the period, both inclusive."""
    month, year = parse_period_key(period)
    return date(year, month, 1), date(year, month, last_day_of_month(year, month))


def last_day_of_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def date_in_period(d: date | None, period: str) -> bool:
    if d is None:
        return False
    start, end = period_date_range(period)
    return start <= d <= end


def period_to_fy(period: str) -> str:
    """Indian financial year (April-March) containing the period.

      - 012025 → 2024-25
      - 042025 → 2025-26
    """
    month, year = parse_period_key(period)
    fy_start = year if month >= 4 else year - 1
    return f"{fy_start}-{(fy_start + 1) % 100:02d}"


def next_month(month: int, year: int) -> tuple[int, int]:
    if month == 12:
        return 1, year + 1
    return month + 1, year
