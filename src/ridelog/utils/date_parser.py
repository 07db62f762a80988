"""Date and timestamp parsing utilities."""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

from ridelog.domain import periods

PERIODS = (
    "today",
    "yesterday",
    "this-week",
    "last-week",
    "this-month",
    "last-month",
    "this-cycle",
    "last-cycle",
)

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _relative_date(text: str, today: date) -> Optional[date]:
    """Resolve relative expressions like 'yesterday' or 'last friday'."""
    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    if text.startswith("last "):
        unit = text[5:]
        if unit == "week":
            return periods.week_start(today) - timedelta(weeks=1)
        if unit == "month":
            return periods.month_start(today) - relativedelta(months=1)
        if unit == "cycle":
            return periods.billing_cycle_start(today) - relativedelta(months=1)
        if unit in _WEEKDAYS:
            days_ago = (today.weekday() - _WEEKDAYS.index(unit)) % 7 or 7
            return today - timedelta(days=days_ago)
    elif text.startswith("this "):
        unit = text[5:]
        if unit == "week":
            return periods.week_start(today)
        if unit == "month":
            return periods.month_start(today)
        if unit == "cycle":
            return periods.billing_cycle_start(today)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "last friday", "this week", "last month",
    "this cycle"). Week, month and cycle expressions resolve to the first
    day of that period.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    relative = _relative_date(text, today or date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, zone: Optional[tzinfo] = None, now: Optional[datetime] = None) -> datetime:
    """Parse a ride timestamp.

    "now" is the current instant. Relative day expressions resolve to noon of
    that day. Absolute values without a time zone are interpreted in `zone`
    (the machine's local zone if None); values with an explicit offset keep it.

    Args:
        value: Timestamp string (e.g. "2024-06-01 18:30", "yesterday", "now")
        zone: Zone for values without an explicit offset
        now: Reference instant for "now" and relative expressions

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the value cannot be parsed
    """
    zone = zone or tz.tzlocal()
    now = now or datetime.now(zone)
    text = value.strip().lower()
    if text == "now":
        return now

    relative = _relative_date(text, periods.local_date(now, zone))
    if relative is not None:
        return datetime(relative.year, relative.month, relative.day, 12, 0, tzinfo=zone)

    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone)
    return parsed


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Current periods end today; previous periods end on their last day.

    Args:
        period: One of today, yesterday, this-week, last-week, this-month,
            last-month, this-cycle, last-cycle
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "today":
        return (today, today)

    elif period == "yesterday":
        yesterday = today - timedelta(days=1)
        return (yesterday, yesterday)

    elif period == "this-week":
        return (periods.week_start(today), today)

    elif period == "last-week":
        start_date = periods.week_start(today) - timedelta(weeks=1)
        return (start_date, periods.week_end(start_date))

    elif period == "this-month":
        return (periods.month_start(today), today)

    elif period == "last-month":
        start_date = periods.month_start(today) - relativedelta(months=1)
        return (start_date, periods.month_end(start_date))

    elif period == "this-cycle":
        return (periods.billing_cycle_start(today), today)

    elif period == "last-cycle":
        start_date = periods.billing_cycle_start(today) - relativedelta(months=1)
        return (start_date, periods.billing_cycle_end(start_date))

    else:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
