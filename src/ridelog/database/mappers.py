"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: stored timestamps are naive UTC and
stored money columns may come back as floats on some backends, while domain
entities always carry aware datetimes and Decimals.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from dateutil import tz

from ridelog.domain import entities as domain
from ridelog.database.models import (
    SettingsRecord as ORMSettings,
    TripRecord as ORMTrip,
)


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def to_storage_datetime(moment: datetime) -> datetime:
    """Convert a timestamp to naive UTC for storage (naive input is already UTC)."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz.UTC).replace(tzinfo=None)


def from_storage_datetime(moment: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a stored naive timestamp."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz.UTC)
    return moment


def trip_to_domain(orm_trip: ORMTrip) -> domain.Trip:
    """Convert SQLAlchemy TripRecord model to domain Trip entity."""
    payment_method = None
    if orm_trip.payment_method:
        payment_method = domain.PaymentMethod(orm_trip.payment_method)

    return domain.Trip(
        id=orm_trip.id,
        platform=orm_trip.platform,
        amount=_decimal(orm_trip.amount),
        date=from_storage_datetime(orm_trip.date),
        distance=_decimal(orm_trip.distance),
        pickup_location=orm_trip.pickup_location,
        payment_method=payment_method,
        paid_to_cashier=bool(orm_trip.paid_to_cashier),
        salik_fee=_decimal(orm_trip.salik_fee),
        airport_fee=_decimal(orm_trip.airport_fee),
        booking_fee=_decimal(orm_trip.booking_fee),
        commission=_decimal(orm_trip.commission),
        fuel_cost=_decimal(orm_trip.fuel_cost),
        created_at=from_storage_datetime(orm_trip.created_at),
    )


def settings_to_domain(orm_settings: ORMSettings) -> domain.Settings:
    """Convert SQLAlchemy SettingsRecord model to domain Settings entity."""
    return domain.Settings(
        monthly_goal=_decimal(orm_settings.monthly_goal),
        bolt_commission=_decimal(orm_settings.bolt_commission),
        fuel_cost_per_km=_decimal(orm_settings.fuel_cost_per_km),
        full_name=orm_settings.full_name or "",
        custom_platforms=tuple(orm_settings.custom_platforms or ()),
        custom_pickup_locations=tuple(orm_settings.custom_pickup_locations or ()),
    )
