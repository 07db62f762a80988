"""Trip domain service."""

import logging
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Optional

from ridelog.database.base import Database
from ridelog.domain import aggregation
from ridelog.domain.entities import (
    FeeOverride,
    PaymentMethod,
    Trip,
    TripDraft,
    TripFilter,
    TripPage,
)
from ridelog.domain.errors import (
    NotFoundError,
    ValidationError,
    cashier_not_applicable,
    settled_payment_locked,
    trip_not_found,
)
from ridelog.domain.fees import apply_fee_defaults
from ridelog.domain.money import require_max_places
from ridelog.utils.identifier_resolver import resolve_pickup_location, resolve_platform

logger = logging.getLogger(__name__)

# Decimal places kept by the trip columns
TRIP_PLACES = 2


def _require_cents(draft: TripDraft, booking_fee: Optional[Decimal]) -> None:
    """Reject user-entered values that storage would round."""
    require_max_places("amount", draft.amount, TRIP_PLACES)
    require_max_places("distance", draft.distance, TRIP_PLACES)
    require_max_places("salik_fee", draft.salik_fee, TRIP_PLACES)
    require_max_places("booking_fee", booking_fee, TRIP_PLACES)


class TripService:
    """Service for recording and editing trips."""

    def __init__(self, db: Database):
        """Initialize trip service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_trip(
        self,
        platform: str,
        amount: Decimal,
        date: datetime,
        distance: Optional[Decimal] = None,
        pickup_location: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        salik_fee: Optional[Decimal] = None,
        booking_fee: Optional[Decimal] = None,
    ) -> str:
        """Record a trip with its fee defaults computed from current settings.

        Args:
            platform: Platform name (built-in or custom)
            amount: Gross fare
            date: Ride timestamp
            distance: Optional distance in km
            pickup_location: Optional pickup location (built-in or custom)
            payment_method: Optional payment method
            salik_fee: Optional toll fee entered by the user
            booking_fee: Optional manual booking fee, used only where the
                booking fee is not fixed by the pickup location

        Returns:
            Trip ID

        Raises:
            ValidationError: If the platform or location is unknown, a value is
                negative, or a value has more than two decimal places
        """
        settings = self.db.get_settings()
        draft = TripDraft(
            platform=resolve_platform(settings, platform),
            amount=amount,
            date=date,
            distance=distance,
            pickup_location=resolve_pickup_location(settings, pickup_location),
            payment_method=payment_method,
            salik_fee=salik_fee,
        )
        _require_cents(draft, booking_fee)
        draft = apply_fee_defaults(draft, settings, FeeOverride(booking_fee=booking_fee))

        trip_id = self.db.create_trip(
            platform=draft.platform,
            amount=draft.amount,
            date=draft.date,
            distance=draft.distance,
            pickup_location=draft.pickup_location,
            payment_method=draft.payment_method,
            salik_fee=draft.salik_fee,
            airport_fee=draft.airport_fee,
            booking_fee=draft.booking_fee,
            commission=draft.commission,
            fuel_cost=draft.fuel_cost,
        )
        logger.info("Recorded %s trip %s for %s", draft.platform, trip_id, draft.amount)
        return trip_id

    def get_trip(self, trip_id: str) -> Optional[Trip]:
        """Get trip by ID, or None if not found."""
        return self.db.get_trip(trip_id)

    def require_trip(self, trip_id: str) -> Trip:
        """Get trip by ID.

        Raises:
            NotFoundError: If the trip doesn't exist
        """
        trip = self.db.get_trip(trip_id)
        if trip is None:
            raise NotFoundError(trip_not_found(trip_id))
        return trip

    def update_trip(
        self,
        trip_id: str,
        platform: Optional[str] = None,
        amount: Optional[Decimal] = None,
        date: Optional[datetime] = None,
        distance: Optional[Decimal] = None,
        pickup_location: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        salik_fee: Optional[Decimal] = None,
        booking_fee: Optional[Decimal] = None,
        clear_pickup_location: bool = False,
    ) -> Trip:
        """Edit a trip and recompute its derived fees.

        Only provided fields change. Commission, booking, airport and fuel
        fees are recomputed from the edited trip using current settings. A
        manual booking fee survives the edit only if neither the platform nor
        the pickup location changed, or if a new one is given.
        Once a trip has been paid to the cashier its payment method can no
        longer change.

        Args:
            trip_id: Trip ID to update
            platform: Optional new platform
            amount: Optional new gross fare
            date: Optional new timestamp
            distance: Optional new distance
            pickup_location: Optional new pickup location
            payment_method: Optional new payment method
            salik_fee: Optional new toll fee
            booking_fee: Optional manual booking fee
            clear_pickup_location: If True, remove the pickup location

        Returns:
            The updated trip

        Raises:
            NotFoundError: If the trip doesn't exist
            ValidationError: If values are invalid
        """
        trip = self.require_trip(trip_id)
        settings = self.db.get_settings()

        if (
            trip.paid_to_cashier
            and payment_method is not None
            and payment_method != trip.payment_method
        ):
            raise ValidationError(settled_payment_locked(trip_id))

        if clear_pickup_location and pickup_location is not None:
            raise ValidationError("Cannot set both pickup_location and clear_pickup_location")

        new_platform = resolve_platform(settings, platform) if platform is not None else trip.platform
        if clear_pickup_location:
            new_location = None
        elif pickup_location is not None:
            new_location = resolve_pickup_location(settings, pickup_location)
        else:
            new_location = trip.pickup_location

        if booking_fee is None and new_platform == trip.platform and new_location == trip.pickup_location:
            booking_fee = trip.booking_fee

        draft = TripDraft(
            platform=new_platform,
            amount=amount if amount is not None else trip.amount,
            date=date if date is not None else trip.date,
            distance=distance if distance is not None else trip.distance,
            pickup_location=new_location,
            payment_method=payment_method if payment_method is not None else trip.payment_method,
            salik_fee=salik_fee if salik_fee is not None else trip.salik_fee,
        )
        _require_cents(draft, booking_fee)
        draft = apply_fee_defaults(draft, settings, FeeOverride(booking_fee=booking_fee))

        self.db.update_trip(
            trip_id=trip_id,
            platform=draft.platform,
            amount=draft.amount,
            date=draft.date,
            distance=draft.distance,
            pickup_location=draft.pickup_location,
            payment_method=draft.payment_method,
            salik_fee=draft.salik_fee,
            airport_fee=draft.airport_fee,
            booking_fee=draft.booking_fee,
            commission=draft.commission,
            fuel_cost=draft.fuel_cost,
        )
        logger.info("Updated trip %s", trip_id)
        return self.require_trip(trip_id)

    def mark_paid_to_cashier(self, trip_id: str) -> Trip:
        """Record that a cash or card trip's proceeds were handed to the cashier.

        Marking an already-paid trip is a no-op.

        Raises:
            NotFoundError: If the trip doesn't exist
            ValidationError: If the trip was not paid by cash or credit card
        """
        trip = self.require_trip(trip_id)
        if trip.payment_method is None or not trip.payment_method.settles_with_cashier:
            raise ValidationError(cashier_not_applicable(trip_id, trip.payment_method))
        if trip.paid_to_cashier:
            return trip

        self.db.set_paid_to_cashier(trip_id)
        logger.info("Trip %s marked as paid to cashier", trip_id)
        return self.require_trip(trip_id)

    def list_trips(
        self,
        trip_filter: Optional[TripFilter] = None,
        zone: Optional[tzinfo] = None,
    ) -> list[Trip]:
        """List trips newest first, filtered by platform and local date range."""
        platform = None
        if trip_filter is not None and not trip_filter.matches_all_platforms:
            platform = trip_filter.platform
        return aggregation.filter_trips(self.db.list_trips(platform=platform), trip_filter, zone)

    def list_trip_page(self, page: int = 1, platform: Optional[str] = None) -> TripPage:
        """One page of the newest-first trip log."""
        return aggregation.paginate_trips(self.db.list_trips(), page=page, platform=platform)
