"""UTC helpers, epoch-millisecond conversion and the month calendar grid.

Bar timestamps are integer milliseconds since the Unix epoch. Months are
1-based. Calendar weeks start on Sunday.
"""

from __future__ import annotations

import calendar
from datetime import UTC, date, datetime, tzinfo

# Sunday-first calendar, matching the date picker layout
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def utc_now() -> datetime:
    """Return the current UTC datetime, timezone-aware."""
    return datetime.now(UTC)


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive datetimes are UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)


def from_epoch_ms(timestamp_ms: int, tz: tzinfo = UTC) -> datetime:
    """Convert epoch milliseconds to a timezone-aware datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=tz)


def format_date(d: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def today_string() -> str:
    """Today's UTC date as YYYY-MM-DD."""
    return format_date(utc_now().date())


def is_same_day(a: date, b: date) -> bool:
    """Compare year, month and day only (datetimes are truncated)."""
    if isinstance(a, datetime):
        a = a.date()
    if isinstance(b, datetime):
        b = b.date()
    return a == b


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of the month, 0 = Sunday through 6 = Saturday."""
    # calendar.weekday() is Monday = 0
    return (calendar.weekday(year, month, 1) + 1) % 7


def calendar_days(year: int, month: int) -> list[list[int]]:
    """Weeks of the month as rows of 7 day numbers, Sunday first.

    Days belonging to the previous or next month are 0.
    """
    return _CALENDAR.monthdayscalendar(year, month)
