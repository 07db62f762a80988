"""Domain model entities for ridelog.

These are pure data classes representing business concepts, independent of
the database schema. Fee rules and report aggregation operate only on these
types, so they stay usable with any storage backend.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


BUILTIN_PLATFORMS = ("bolt", "uber", "careem", "dtc")

AIRPORT_LOCATIONS = frozenset({"airport_t1", "airport_t2", "airport_t3"})
LANDMARK_LOCATIONS = frozenset({"dubai_mall", "atlantis_the_palm", "global_village"})
BUILTIN_PICKUP_LOCATIONS = (
    "airport_t1",
    "airport_t2",
    "airport_t3",
    "dubai_mall",
    "atlantis_the_palm",
    "global_village",
    "other",
)


class PaymentMethod(str, Enum):
    """How the passenger paid for a trip."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    ONLINE_PAID = "online_paid"

    @property
    def settles_with_cashier(self) -> bool:
        """Cash and card proceeds are handed over to the cashier."""
        return self in (PaymentMethod.CASH, PaymentMethod.CREDIT_CARD)


class BucketStrategy(str, Enum):
    """Report bucketing strategies."""

    SINGLE_DAY = "single_day"
    DAILY = "daily"
    WEEKLY = "weekly"
    CALENDAR_MONTH = "calendar_month"
    BILLING_CYCLE = "billing_cycle"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Settings:
    """Per-user configuration used by the fee rules and goal tracking."""

    monthly_goal: Decimal = Decimal("2000")
    bolt_commission: Decimal = Decimal("20")
    fuel_cost_per_km: Decimal = Decimal("0")
    full_name: str = ""
    custom_platforms: tuple[str, ...] = ()
    custom_pickup_locations: tuple[str, ...] = ()

    @property
    def platforms(self) -> tuple[str, ...]:
        """Built-in platforms followed by the user's custom ones."""
        return BUILTIN_PLATFORMS + tuple(
            p for p in self.custom_platforms if p not in BUILTIN_PLATFORMS
        )

    @property
    def pickup_locations(self) -> tuple[str, ...]:
        """Built-in pickup locations followed by the user's custom ones."""
        return BUILTIN_PICKUP_LOCATIONS + tuple(
            loc
            for loc in self.custom_pickup_locations
            if loc not in BUILTIN_PICKUP_LOCATIONS
        )


@dataclass(frozen=True)
class Trip:
    """Trip (income record) domain entity."""

    id: str
    platform: str
    amount: Decimal
    date: datetime
    distance: Optional[Decimal] = None
    pickup_location: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    paid_to_cashier: bool = False
    salik_fee: Optional[Decimal] = None
    airport_fee: Optional[Decimal] = None
    booking_fee: Optional[Decimal] = None
    commission: Optional[Decimal] = None
    fuel_cost: Optional[Decimal] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TripDraft:
    """Candidate trip before fee defaults are applied and an ID is assigned."""

    platform: str
    amount: Decimal
    date: datetime
    distance: Optional[Decimal] = None
    pickup_location: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    salik_fee: Optional[Decimal] = None
    airport_fee: Optional[Decimal] = None
    booking_fee: Optional[Decimal] = None
    commission: Optional[Decimal] = None
    fuel_cost: Optional[Decimal] = None


@dataclass(frozen=True)
class FeeDefaults:
    """Fee values derived from a trip's platform, location, fare and distance."""

    commission: Decimal
    booking_fee: Decimal
    airport_fee: Decimal
    fuel_cost: Decimal
    booking_fee_editable: bool = False


@dataclass(frozen=True)
class FeeOverride:
    """Values the user entered by hand in place of computed defaults."""

    booking_fee: Optional[Decimal] = None


@dataclass(frozen=True)
class TripFilter:
    """Composable trip filter; every set criterion must match."""

    platform: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def matches_all_platforms(self) -> bool:
        return self.platform is None or self.platform == "all"


@dataclass(frozen=True)
class BucketSummary:
    """Totals for one time bucket of trips."""

    label: str
    start: date
    end: date
    ride_count: int = 0
    gross_total: Decimal = Decimal("0.00")
    salik_fee_total: Decimal = Decimal("0.00")
    airport_fee_total: Decimal = Decimal("0.00")
    booking_fee_total: Decimal = Decimal("0.00")
    commission_total: Decimal = Decimal("0.00")
    fuel_cost_total: Decimal = Decimal("0.00")
    net_total: Decimal = Decimal("0.00")
    distance_total: Decimal = Decimal("0.00")

    @property
    def fee_total(self) -> Decimal:
        return (
            self.salik_fee_total
            + self.airport_fee_total
            + self.booking_fee_total
            + self.commission_total
            + self.fuel_cost_total
        )


@dataclass(frozen=True)
class Report:
    """Ordered buckets produced by one bucketing strategy."""

    strategy: BucketStrategy
    buckets: tuple[BucketSummary, ...]
    trip_filter: TripFilter = field(default_factory=TripFilter)

    @property
    def total_net(self) -> Decimal:
        return sum((b.net_total for b in self.buckets), Decimal("0.00"))

    @property
    def total_rides(self) -> int:
        return sum(b.ride_count for b in self.buckets)


@dataclass(frozen=True)
class DashboardOverview:
    """Headline figures for the dashboard view."""

    month_net: Decimal
    total_net: Decimal
    average_daily_net: Decimal
    active_days: int
    monthly_goal: Decimal
    goal_progress: Decimal
    recent_trips: tuple[Trip, ...]


@dataclass(frozen=True)
class CashierSummary:
    """Cash and card proceeds split by settlement state."""

    paid: Decimal = Decimal("0.00")
    pending: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class PaymentBreakdown:
    """Gross income per platform and payment method."""

    by_platform: dict[str, dict[PaymentMethod, Decimal]]
    totals: dict[PaymentMethod, Decimal]
    cashier: CashierSummary


@dataclass(frozen=True)
class TripPage:
    """One page of the newest-first trip log."""

    trips: tuple[Trip, ...]
    page: int
    total_pages: int
    total_trips: int
