from __future__ import annotations

import calendar
import math
from datetime import date

from .conditions import Condition


def usd(value: object) -> str:
    """Whole-dollar display; sentinels and non-finite values show as $0."""
    if isinstance(value, Condition):
        return "$0"
    v = float(value)  # type: ignore[arg-type]
    if not math.isfinite(v):
        return "$0"
    sign = "-" if v < 0 else ""
    return f"{sign}${round_half_up(abs(v)):,}"


def years_label(months: object) -> str:
    if isinstance(months, Condition):
        return "Never"
    return f"{float(months) / 12.0:.1f} years"  # type: ignore[arg-type]


def non_negative(value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(v):
        return 0.0
    return max(0.0, v)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
