"""Date and period-key utilities

Period keys are "YYYY-MM" strings; day keys are "YYYY-MM-DD" strings. Both
are always engine-generated, so parse failures raise instead of defaulting.
"""

import calendar
import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from finance_tracker.config import settings
from finance_tracker.domain.exceptions import MalformedPeriodError

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")
_DAY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def local_today() -> date:
    """Today's date in the configured timezone"""
    return datetime.now(ZoneInfo(settings.timezone)).date()


def year_month(d: date) -> str:
    """Period key of a date, e.g. 2024-07-15 -> "2024-07" """
    return f"{d.year:04d}-{d.month:02d}"


def year_month_day(d: date) -> str:
    return d.isoformat()


def first_day_of_month(d: date) -> date:
    return d.replace(day=1)


def parse_period(period: str) -> tuple[int, int]:
    """Split a "YYYY-MM" key into (year, month)"""
    match = _PERIOD_RE.match(period) if isinstance(period, str) else None
    if not match:
        raise MalformedPeriodError(f"Invalid period key: {period!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise MalformedPeriodError(f"Invalid month in period key: {period!r}")
    return year, month


def parse_day(day_key: str) -> date:
    """Parse a "YYYY-MM-DD" key"""
    if not isinstance(day_key, str) or not _DAY_RE.match(day_key):
        raise MalformedPeriodError(f"Invalid day key: {day_key!r}")
    try:
        return date.fromisoformat(day_key)
    except ValueError as e:
        raise MalformedPeriodError(f"Invalid day key: {day_key!r}") from e


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def day_in_month(year: int, month: int, day: int) -> date:
    """Date for a day-of-month, snapped to the month's last day when it overflows"""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(base: date, months: int) -> date:
    """
    Calendar month arithmetic.

    The day of month is preserved when the target month has it; otherwise the
    result snaps to the target month's last day (2024-01-31 + 1 -> 2024-02-29),
    so consecutive offsets always land in consecutive months.
    """
    total_months = base.month - 1 + months
    year = base.year + total_months // 12
    month = total_months % 12 + 1
    return day_in_month(year, month, base.day)


def period_due_date(period: str, due_day: int) -> date:
    """Due date of a period for a given day of month"""
    year, month = parse_period(period)
    return day_in_month(year, month, due_day)
