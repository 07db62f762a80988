"""Report domain service."""

from datetime import date, datetime, tzinfo
from typing import Optional

from dateutil import tz

from ridelog.database.base import Database
from ridelog.domain import aggregation, periods
from ridelog.domain.entities import (
    DashboardOverview,
    PaymentBreakdown,
    Report,
    Trip,
    TripFilter,
)
from ridelog.domain.errors import ValidationError


class ReportService:
    """Service for building report view models from stored trips."""

    def __init__(self, db: Database, zone: Optional[tzinfo] = None):
        """Initialize report service.

        Args:
            db: Database instance
            zone: Time zone used for local day grouping (machine's zone if None)
        """
        self.db = db
        self.zone = zone

    def today(self) -> date:
        """Today's date in the report time zone."""
        return periods.local_date(datetime.now(tz.UTC), self.zone)

    def get_trips(self, platform: Optional[str] = None) -> list[Trip]:
        """Load trips for a report, optionally for one platform ("all" for every platform)."""
        if platform == "all":
            platform = None
        return self.db.list_trips(platform=platform)

    def day(self, day: date, platform: Optional[str] = None) -> Report:
        """Single-day report in the reference time zone."""
        return aggregation.single_day(
            self.get_trips(platform), day, TripFilter(platform=platform)
        )

    def daily(self, platform: Optional[str] = None) -> Report:
        """One bucket per day with trips, newest first."""
        return aggregation.daily_groups(
            self.get_trips(platform), TripFilter(platform=platform), self.zone
        )

    def weekly(self, today: Optional[date] = None, platform: Optional[str] = None) -> Report:
        """Trailing twelve weeks, oldest first."""
        return aggregation.rolling_weeks(
            self.get_trips(platform),
            today or self.today(),
            trip_filter=TripFilter(platform=platform),
            zone=self.zone,
        )

    def monthly(
        self,
        today: Optional[date] = None,
        platform: Optional[str] = None,
        calendar: bool = False,
    ) -> Report:
        """Trailing twelve billing cycles (or calendar months), oldest first."""
        build = aggregation.rolling_calendar_months if calendar else aggregation.rolling_billing_cycles
        return build(
            self.get_trips(platform),
            today or self.today(),
            trip_filter=TripFilter(platform=platform),
            zone=self.zone,
        )

    def custom(self, start: date, end: date, platform: Optional[str] = None) -> Report:
        """Single bucket for an inclusive date range.

        Raises:
            ValidationError: If start is after end
        """
        if start > end:
            raise ValidationError(f"Start date {start} is after end date {end}")
        return aggregation.custom_range(
            self.get_trips(platform), start, end, TripFilter(platform=platform), self.zone
        )

    def dashboard(self, today: Optional[date] = None) -> DashboardOverview:
        """Headline figures for the dashboard."""
        return aggregation.dashboard_overview(
            self.get_trips(), self.db.get_settings(), today or self.today(), self.zone
        )

    def payments(self) -> PaymentBreakdown:
        """Income by payment method and cashier settlement state."""
        return aggregation.payment_breakdown(self.get_trips())
