"""Date bucketing helpers shared by the report strategies.

All helpers work on calendar dates after a trip timestamp has been converted
to a specific time zone. Naive timestamps are treated as UTC, matching how
trips are stored.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from dateutil import tz
from dateutil.relativedelta import relativedelta

# Single-day reports always use this zone, independent of the viewer.
REFERENCE_TIMEZONE = tz.gettz("Asia/Dubai")

BILLING_CYCLE_START_DAY = 21


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve a time zone name, falling back to the machine's local zone.

    Raises:
        ValueError: If the name is not a known time zone
    """
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown time zone '{name}'")
    return zone


def to_zone(moment: datetime, zone: Optional[tzinfo] = None) -> datetime:
    """Convert a timestamp to the given zone (local zone if None)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz.UTC)
    return moment.astimezone(zone if zone is not None else tz.tzlocal())


def local_date(moment: datetime, zone: Optional[tzinfo] = None) -> date:
    """Calendar date of a timestamp in the given zone."""
    return to_zone(moment, zone).date()


def week_start(day: date) -> date:
    """Monday of the ISO week containing the day."""
    return day - timedelta(days=day.weekday())


def week_end(start: date) -> date:
    """Sunday of the week starting on the given Monday."""
    return start + timedelta(days=6)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(start: date) -> date:
    return start + relativedelta(months=1) - timedelta(days=1)


def billing_cycle_start(day: date) -> date:
    """Start of the 21st-to-20th billing cycle containing the day."""
    if day.day >= BILLING_CYCLE_START_DAY:
        return day.replace(day=BILLING_CYCLE_START_DAY)
    previous = day - relativedelta(months=1)
    return previous.replace(day=BILLING_CYCLE_START_DAY)


def billing_cycle_end(start: date) -> date:
    """Last day (the 20th of the next month) of a billing cycle."""
    return start + relativedelta(months=1) - timedelta(days=1)


def rolling_week_starts(today: date, count: int) -> list[date]:
    """Mondays of the trailing `count` weeks ending with today's week, oldest first."""
    current = week_start(today)
    return [current - timedelta(weeks=offset) for offset in range(count - 1, -1, -1)]


def rolling_month_starts(today: date, count: int) -> list[date]:
    """First days of the trailing `count` calendar months, oldest first."""
    current = month_start(today)
    return [current - relativedelta(months=offset) for offset in range(count - 1, -1, -1)]


def rolling_billing_cycle_starts(today: date, count: int) -> list[date]:
    """Start days of the trailing `count` billing cycles, oldest first."""
    current = billing_cycle_start(today)
    return [current - relativedelta(months=offset) for offset in range(count - 1, -1, -1)]


def day_label(day: date) -> str:
    return day.isoformat()


def week_label(start: date) -> str:
    return f"{start:%b} {start.day} {start:%y}"


def month_label(start: date) -> str:
    return f"{start:%b %y}"
