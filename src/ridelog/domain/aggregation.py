"""Report aggregation over recorded trips.

Every function here is a pure transform: it receives the full trip list and
returns freshly computed view models. Rolling windows (weeks, months, billing
cycles) are ordered oldest to newest and always contain every period, even
empty ones. Calendar-day groupings are ordered newest to oldest and contain
only days that have trips.
"""

import logging
import math
from collections import defaultdict
from datetime import date, tzinfo
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from dateutil import tz

from ridelog.domain.entities import (
    BucketStrategy,
    BucketSummary,
    CashierSummary,
    DashboardOverview,
    PaymentBreakdown,
    PaymentMethod,
    Report,
    Settings,
    Trip,
    TripFilter,
    TripPage,
)
from ridelog.domain.fees import net_income
from ridelog.domain.money import ZERO, or_zero, round_money
from ridelog.domain import periods

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 12
TRIPS_PER_PAGE = 50
RECENT_TRIP_COUNT = 5

MONTHLY_INSIGHT = (
    "Your income this month is tracking close to last month. Keep up the great work!"
)


def filter_trips(
    trips: Iterable[Trip],
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> list[Trip]:
    """Keep trips matching the platform and inclusive date range of the filter.

    The end date covers the whole day, so a trip late on the end date is
    included.
    """
    if trip_filter is None:
        return list(trips)

    result = []
    for trip in trips:
        if not trip_filter.matches_all_platforms and trip.platform != trip_filter.platform:
            continue
        if trip_filter.start_date is not None or trip_filter.end_date is not None:
            day = periods.local_date(trip.date, zone)
            if trip_filter.start_date is not None and day < trip_filter.start_date:
                continue
            if trip_filter.end_date is not None and day > trip_filter.end_date:
                continue
        result.append(trip)
    return result


def summarize_trips(
    trips: Sequence[Trip], label: str, start: date, end: date
) -> BucketSummary:
    """Reduce a group of trips to its totals."""
    gross = salik = airport = booking = commission = fuel = net = distance = ZERO
    for trip in trips:
        gross += Decimal(trip.amount)
        salik += or_zero(trip.salik_fee)
        airport += or_zero(trip.airport_fee)
        booking += or_zero(trip.booking_fee)
        commission += or_zero(trip.commission)
        fuel += or_zero(trip.fuel_cost)
        net += net_income(trip)
        distance += or_zero(trip.distance)

    return BucketSummary(
        label=label,
        start=start,
        end=end,
        ride_count=len(trips),
        gross_total=round_money(gross),
        salik_fee_total=round_money(salik),
        airport_fee_total=round_money(airport),
        booking_fee_total=round_money(booking),
        commission_total=round_money(commission),
        fuel_cost_total=round_money(fuel),
        net_total=round_money(net),
        distance_total=round_money(distance),
    )


def group_trips_by_period(
    trips: Iterable[Trip],
    period_start: Callable[[date], date],
    zone: Optional[tzinfo] = None,
) -> dict[date, list[Trip]]:
    """Group trips by the start date of the period containing their local date."""
    grouped: dict[date, list[Trip]] = defaultdict(list)
    for trip in trips:
        grouped[period_start(periods.local_date(trip.date, zone))].append(trip)
    return dict(grouped)


def single_day(
    trips: Iterable[Trip],
    day: date,
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = periods.REFERENCE_TIMEZONE,
) -> Report:
    """Summarize the trips of one calendar day in the reference time zone."""
    selected = [
        trip
        for trip in filter_trips(trips, trip_filter, zone)
        if periods.local_date(trip.date, zone) == day
    ]
    bucket = summarize_trips(selected, periods.day_label(day), day, day)
    return Report(
        strategy=BucketStrategy.SINGLE_DAY,
        buckets=(bucket,),
        trip_filter=trip_filter or TripFilter(),
    )


def daily_groups(
    trips: Iterable[Trip],
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> Report:
    """One bucket per day that has trips, newest day first."""
    grouped = group_trips_by_period(filter_trips(trips, trip_filter, zone), lambda d: d, zone)
    buckets = tuple(
        summarize_trips(grouped[day], periods.day_label(day), day, day)
        for day in sorted(grouped, reverse=True)
    )
    logger.debug("Built %d daily buckets", len(buckets))
    return Report(
        strategy=BucketStrategy.DAILY,
        buckets=buckets,
        trip_filter=trip_filter or TripFilter(),
    )


def _rolling_report(
    trips: Iterable[Trip],
    starts: list[date],
    period_start: Callable[[date], date],
    period_end: Callable[[date], date],
    label: Callable[[date], str],
    strategy: BucketStrategy,
    trip_filter: Optional[TripFilter],
    zone: Optional[tzinfo],
) -> Report:
    grouped = group_trips_by_period(filter_trips(trips, trip_filter, zone), period_start, zone)
    buckets = tuple(
        summarize_trips(grouped.get(start, []), label(start), start, period_end(start))
        for start in starts
    )
    logger.debug("Built %d %s buckets", len(buckets), strategy.value)
    return Report(strategy=strategy, buckets=buckets, trip_filter=trip_filter or TripFilter())


def rolling_weeks(
    trips: Iterable[Trip],
    today: date,
    count: int = DEFAULT_WINDOW,
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> Report:
    """Trailing Monday-start weeks ending with the week containing today."""
    return _rolling_report(
        trips,
        starts=periods.rolling_week_starts(today, count),
        period_start=periods.week_start,
        period_end=periods.week_end,
        label=periods.week_label,
        strategy=BucketStrategy.WEEKLY,
        trip_filter=trip_filter,
        zone=zone,
    )


def rolling_calendar_months(
    trips: Iterable[Trip],
    today: date,
    count: int = DEFAULT_WINDOW,
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> Report:
    """Trailing calendar months ending with the current month."""
    return _rolling_report(
        trips,
        starts=periods.rolling_month_starts(today, count),
        period_start=periods.month_start,
        period_end=periods.month_end,
        label=periods.month_label,
        strategy=BucketStrategy.CALENDAR_MONTH,
        trip_filter=trip_filter,
        zone=zone,
    )


def rolling_billing_cycles(
    trips: Iterable[Trip],
    today: date,
    count: int = DEFAULT_WINDOW,
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> Report:
    """Trailing 21st-to-20th billing cycles ending with the current cycle."""
    return _rolling_report(
        trips,
        starts=periods.rolling_billing_cycle_starts(today, count),
        period_start=periods.billing_cycle_start,
        period_end=periods.billing_cycle_end,
        label=periods.month_label,
        strategy=BucketStrategy.BILLING_CYCLE,
        trip_filter=trip_filter,
        zone=zone,
    )


def custom_range(
    trips: Iterable[Trip],
    start: date,
    end: date,
    trip_filter: Optional[TripFilter] = None,
    zone: Optional[tzinfo] = None,
) -> Report:
    """Single bucket covering an inclusive start/end date pair."""
    base = trip_filter or TripFilter()
    range_filter = TripFilter(platform=base.platform, start_date=start, end_date=end)
    selected = filter_trips(filter_trips(trips, base, zone), range_filter, zone)
    bucket = summarize_trips(selected, f"{start.isoformat()} - {end.isoformat()}", start, end)
    return Report(strategy=BucketStrategy.CUSTOM, buckets=(bucket,), trip_filter=range_filter)


def sort_newest_first(trips: Iterable[Trip]) -> list[Trip]:
    """Sort trips by timestamp, newest first."""
    return sorted(trips, key=lambda trip: periods.to_zone(trip.date, tz.UTC), reverse=True)


def dashboard_overview(
    trips: Sequence[Trip],
    settings: Settings,
    today: date,
    zone: Optional[tzinfo] = None,
) -> DashboardOverview:
    """Headline figures: this month's net, all-time net, daily average and goal progress."""
    month_filter = TripFilter(start_date=periods.month_start(today), end_date=today)
    month_net = sum((net_income(t) for t in filter_trips(trips, month_filter, zone)), ZERO)
    total_net = sum((net_income(t) for t in trips), ZERO)

    active_days = len({periods.local_date(t.date, zone) for t in trips})
    average = total_net / active_days if active_days > 0 else ZERO

    goal = Decimal(settings.monthly_goal)
    progress = month_net / goal * 100 if goal > 0 else ZERO

    return DashboardOverview(
        month_net=round_money(month_net),
        total_net=round_money(total_net),
        average_daily_net=round_money(average),
        active_days=active_days,
        monthly_goal=round_money(goal),
        goal_progress=round_money(progress),
        recent_trips=tuple(sort_newest_first(trips)[:RECENT_TRIP_COUNT]),
    )


def payment_breakdown(trips: Iterable[Trip]) -> PaymentBreakdown:
    """Gross income by platform and payment method, plus cashier settlement state.

    Trips without a payment method count as paid online.
    """
    by_platform: dict[str, dict[PaymentMethod, Decimal]] = {}
    totals = {method: ZERO for method in PaymentMethod}
    paid = pending = ZERO

    for trip in trips:
        method = trip.payment_method or PaymentMethod.ONLINE_PAID
        amount = Decimal(trip.amount)
        platform_totals = by_platform.setdefault(
            trip.platform, {m: ZERO for m in PaymentMethod}
        )
        platform_totals[method] += amount
        totals[method] += amount

        if method.settles_with_cashier:
            if trip.paid_to_cashier:
                paid += amount
            else:
                pending += amount

    return PaymentBreakdown(
        by_platform={
            platform: {m: round_money(v) for m, v in values.items()}
            for platform, values in by_platform.items()
        },
        totals={m: round_money(v) for m, v in totals.items()},
        cashier=CashierSummary(paid=round_money(paid), pending=round_money(pending)),
    )


def paginate_trips(
    trips: Iterable[Trip],
    page: int = 1,
    per_page: int = TRIPS_PER_PAGE,
    platform: Optional[str] = None,
) -> TripPage:
    """Newest-first trip log, optionally filtered by platform."""
    selected = sort_newest_first(filter_trips(trips, TripFilter(platform=platform)))
    total_pages = math.ceil(len(selected) / per_page) if per_page > 0 else 0
    page = max(1, min(page, total_pages or 1))
    offset = (page - 1) * per_page
    return TripPage(
        trips=tuple(selected[offset : offset + per_page]),
        page=page,
        total_pages=total_pages,
        total_trips=len(selected),
    )
