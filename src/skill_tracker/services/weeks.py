"""Week bucketing helpers.

A week bucket is the Sunday that starts the 7-day week containing a
timestamp. Its ISO date string is the grouping key used by every
aggregation. Timezone-aware timestamps are converted to UTC first; naive
timestamps are taken as UTC, which is how ratings are stored.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from openpyxl.utils.datetime import from_excel

WEEK_LENGTH = timedelta(days=7)

# Accepted non-ISO date layouts for free-text cells
_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d.%m.%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%d %b %Y",
)


def to_naive_utc(value: datetime) -> datetime:
    """
    Convert a datetime to naive UTC.

    Args:
        value: Naive (assumed UTC) or timezone-aware datetime

    Returns:
        Naive datetime in UTC
    """
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def week_start(value: datetime | date) -> date:
    """
    Return the Sunday that starts the week containing ``value``.

    Args:
        value: Any datetime or date

    Returns:
        Date of the week's Sunday

    Examples:
        >>> week_start(datetime(2024, 5, 15, 13, 30))  # a Wednesday
        datetime.date(2024, 5, 12)
        >>> week_start(date(2024, 5, 12))
        datetime.date(2024, 5, 12)
    """
    if isinstance(value, datetime):
        day = to_naive_utc(value).date()
    else:
        day = value
    # weekday(): Monday=0 .. Sunday=6, shifted so Sunday=0
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def week_key(value: datetime | date) -> str:
    """Return the ISO date string of the week bucket containing ``value``."""
    return week_start(value).isoformat()


def week_bounds(value: datetime | date) -> tuple[datetime, datetime]:
    """
    Return the half-open ``[start, end)`` span of the week containing ``value``.

    Both bounds are naive UTC datetimes at midnight.
    """
    start = datetime.combine(week_start(value), time.min)
    return start, start + WEEK_LENGTH


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a loosely typed date value into a naive UTC datetime.

    Accepts datetimes, dates, Excel serial numbers, ISO strings and a few
    common day/month layouts.

    Args:
        value: Cell or query value

    Returns:
        Parsed datetime, or None if the value is empty or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    # openpyxl may parse Excel date cells into datetime already
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        try:
            parsed = from_excel(value)
        except (OverflowError, ValueError):
            return None
        return parsed if isinstance(parsed, datetime) else None

    text = str(value).strip()
    if not text:
        return None
    try:
        return to_naive_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
