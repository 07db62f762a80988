"""Tests for period helpers."""

from datetime import date, datetime

import pytest
from dateutil import tz

from ridelog.domain import periods


def test_billing_cycle_starts_on_the_21st():
    assert periods.billing_cycle_start(date(2024, 3, 25)) == date(2024, 3, 21)
    assert periods.billing_cycle_start(date(2024, 3, 21)) == date(2024, 3, 21)


def test_billing_cycle_before_the_21st_belongs_to_previous_month():
    assert periods.billing_cycle_start(date(2024, 3, 15)) == date(2024, 2, 21)
    assert periods.billing_cycle_start(date(2024, 3, 20)) == date(2024, 2, 21)


def test_billing_cycle_wraps_year():
    assert periods.billing_cycle_start(date(2024, 1, 5)) == date(2023, 12, 21)
    assert periods.billing_cycle_end(date(2023, 12, 21)) == date(2024, 1, 20)


def test_billing_cycle_end_is_20th_of_next_month():
    assert periods.billing_cycle_end(date(2024, 1, 21)) == date(2024, 2, 20)


def test_week_is_monday_to_sunday():
    # 2024-06-13 is a Thursday
    start = periods.week_start(date(2024, 6, 13))
    assert start == date(2024, 6, 10)
    assert start.weekday() == 0
    assert periods.week_end(start) == date(2024, 6, 16)


def test_month_end_handles_leap_year():
    assert periods.month_end(date(2024, 2, 1)) == date(2024, 2, 29)
    assert periods.month_end(date(2023, 2, 1)) == date(2023, 2, 28)


def test_rolling_week_starts_are_oldest_first():
    starts = periods.rolling_week_starts(date(2024, 6, 13), 12)
    assert len(starts) == 12
    assert starts[-1] == date(2024, 6, 10)
    assert starts == sorted(starts)


def test_rolling_billing_cycle_starts():
    starts = periods.rolling_billing_cycle_starts(date(2024, 2, 10), 3)
    assert starts == [date(2023, 11, 21), date(2023, 12, 21), date(2024, 1, 21)]


def test_rolling_month_starts():
    starts = periods.rolling_month_starts(date(2024, 2, 10), 3)
    assert starts == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]


def test_naive_timestamps_are_treated_as_utc():
    dubai = tz.gettz("Asia/Dubai")
    # 22:00 UTC is already the next day in Dubai (UTC+4)
    assert periods.local_date(datetime(2024, 6, 1, 22, 0), dubai) == date(2024, 6, 2)
    assert periods.local_date(datetime(2024, 6, 1, 22, 0), tz.UTC) == date(2024, 6, 1)


def test_resolve_timezone():
    assert periods.resolve_timezone("Asia/Dubai") is not None
    assert periods.resolve_timezone(None) is not None


def test_resolve_timezone_rejects_unknown_zone():
    with pytest.raises(ValueError):
        periods.resolve_timezone("Mars/Olympus_Mons")


def test_labels():
    assert periods.day_label(date(2024, 6, 1)) == "2024-06-01"
    assert periods.week_label(date(2024, 6, 3)) == "Jun 3 24"
    assert periods.month_label(date(2024, 1, 21)) == "Jan 24"


def test_week_labels_distinguish_years():
    starts = periods.rolling_week_starts(date(2024, 1, 10), 3)
    labels = [periods.week_label(start) for start in starts]
    assert labels == ["Dec 25 23", "Jan 1 24", "Jan 8 24"]
