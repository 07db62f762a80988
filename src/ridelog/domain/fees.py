"""Fee rules for recorded trips.

The rules derive commission, booking fee, airport fee and fuel cost from a
trip's platform, pickup location, fare and distance. They are pure functions:
the same inputs always produce the same fees, and settings are passed in
explicitly.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from ridelog.domain.entities import (
    AIRPORT_LOCATIONS,
    LANDMARK_LOCATIONS,
    FeeDefaults,
    FeeOverride,
    Settings,
    Trip,
    TripDraft,
)
from ridelog.domain.money import ZERO, or_zero, require_non_negative, round_money

BOLT = "bolt"

BOLT_AIRPORT_BOOKING_FEE = Decimal("25.00")
BOLT_LANDMARK_BOOKING_FEE = Decimal("16.00")
AIRPORT_FEE = Decimal("20.00")


def is_airport(pickup_location: Optional[str]) -> bool:
    return pickup_location in AIRPORT_LOCATIONS


def is_landmark(pickup_location: Optional[str]) -> bool:
    return pickup_location in LANDMARK_LOCATIONS


def compute_commission(platform: str, amount: Decimal, settings: Settings) -> Decimal:
    """Bolt takes a percentage of the fare; other platforms take nothing here."""
    if platform != BOLT:
        return ZERO
    return round_money(Decimal(amount) * Decimal(settings.bolt_commission) / 100)


def compute_fuel_cost(distance: Optional[Decimal], settings: Settings) -> Decimal:
    """Fuel cost is the distance times the per-km rate, zero without distance."""
    distance = or_zero(distance)
    if distance <= 0:
        return ZERO
    return round_money(distance * Decimal(settings.fuel_cost_per_km))


def compute_fee_defaults(
    platform: str,
    pickup_location: Optional[str],
    amount: Decimal,
    distance: Optional[Decimal],
    settings: Settings,
) -> FeeDefaults:
    """Compute default fees for a trip.

    Bolt charges a booking fee for airport (25) and landmark (16) pickups and
    never an airport fee; for any other pickup the booking fee is left at zero
    for the user to fill in. Other platforms charge a flat airport fee (20) for
    airport pickups and no booking fee.

    Args:
        platform: Platform identifier (built-in or custom)
        pickup_location: Optional pickup location identifier
        amount: Gross fare
        distance: Optional distance in km
        settings: User settings providing commission and fuel rates

    Returns:
        FeeDefaults with every derived fee populated

    Raises:
        ValidationError: If amount, distance or a settings rate is negative
    """
    require_non_negative("amount", amount)
    require_non_negative("distance", distance)
    require_non_negative("bolt_commission", settings.bolt_commission)
    require_non_negative("fuel_cost_per_km", settings.fuel_cost_per_km)

    commission = compute_commission(platform, amount, settings)
    fuel_cost = compute_fuel_cost(distance, settings)

    if platform == BOLT:
        if is_airport(pickup_location):
            booking_fee, editable = BOLT_AIRPORT_BOOKING_FEE, False
        elif is_landmark(pickup_location):
            booking_fee, editable = BOLT_LANDMARK_BOOKING_FEE, False
        else:
            booking_fee, editable = ZERO, True
        airport_fee = ZERO
    else:
        booking_fee, editable = ZERO, False
        airport_fee = AIRPORT_FEE if is_airport(pickup_location) else ZERO

    return FeeDefaults(
        commission=commission,
        booking_fee=booking_fee,
        airport_fee=airport_fee,
        fuel_cost=fuel_cost,
        booking_fee_editable=editable,
    )


def resolve_fees(defaults: FeeDefaults, override: Optional[FeeOverride] = None) -> FeeDefaults:
    """Apply a user override on top of computed defaults.

    A booking fee override only counts while the booking fee is editable for
    the trip's current platform and pickup location.
    """
    if override is None or override.booking_fee is None:
        return defaults
    if not defaults.booking_fee_editable:
        return defaults
    require_non_negative("booking_fee", override.booking_fee)
    return replace(defaults, booking_fee=round_money(override.booking_fee))


def apply_fee_defaults(
    draft: TripDraft, settings: Settings, override: Optional[FeeOverride] = None
) -> TripDraft:
    """Return the draft with commission, booking, airport and fuel fees filled in."""
    require_non_negative("salik_fee", draft.salik_fee)
    defaults = compute_fee_defaults(
        platform=draft.platform,
        pickup_location=draft.pickup_location,
        amount=draft.amount,
        distance=draft.distance,
        settings=settings,
    )
    fees = resolve_fees(defaults, override)
    return replace(
        draft,
        salik_fee=round_money(or_zero(draft.salik_fee)),
        commission=fees.commission,
        booking_fee=fees.booking_fee,
        airport_fee=fees.airport_fee,
        fuel_cost=fees.fuel_cost,
    )


def net_income(trip: Union[Trip, TripDraft]) -> Decimal:
    """Gross fare minus every itemized fee. Not clamped at zero."""
    return (
        Decimal(trip.amount)
        - or_zero(trip.salik_fee)
        - or_zero(trip.airport_fee)
        - or_zero(trip.booking_fee)
        - or_zero(trip.commission)
        - or_zero(trip.fuel_cost)
    )
