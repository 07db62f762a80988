"""Tests for trip service."""

from datetime import datetime
from decimal import Decimal

import pytest
from dateutil import tz

from ridelog.domain.entities import PaymentMethod, TripFilter
from ridelog.domain.errors import NotFoundError, ValidationError

RIDE_TIME = datetime(2024, 6, 1, 10, 0, tzinfo=tz.UTC)


def test_create_trip_computes_fees(trip_service, settings_service):
    """Test creating a trip fills in every derived fee."""
    settings_service.update_settings(fuel_cost_per_km=Decimal("0.29"))
    trip_id = trip_service.create_trip(
        platform="bolt",
        amount=Decimal("100"),
        date=RIDE_TIME,
        distance=Decimal("50"),
        pickup_location="airport_t2",
        salik_fee=Decimal("4"),
    )

    trip = trip_service.get_trip(trip_id)
    assert trip is not None
    assert trip.platform == "bolt"
    assert trip.amount == Decimal("100")
    assert trip.commission == Decimal("20.00")
    assert trip.booking_fee == Decimal("25.00")
    assert trip.airport_fee == Decimal("0")
    assert trip.fuel_cost == Decimal("14.50")
    assert trip.salik_fee == Decimal("4.00")
    assert trip.date == RIDE_TIME
    assert trip.paid_to_cashier is False


def test_create_trip_normalizes_identifiers(trip_service):
    trip_id = trip_service.create_trip(
        platform="Uber", amount=Decimal("30"), date=RIDE_TIME, pickup_location="Airport T1"
    )
    trip = trip_service.get_trip(trip_id)
    assert trip.platform == "uber"
    assert trip.pickup_location == "airport_t1"
    assert trip.airport_fee == Decimal("20.00")


def test_create_trip_unknown_platform(trip_service):
    with pytest.raises(ValidationError, match="Unknown platform"):
        trip_service.create_trip(platform="lyft", amount=Decimal("10"), date=RIDE_TIME)


def test_create_trip_negative_amount(trip_service):
    with pytest.raises(ValidationError):
        trip_service.create_trip(platform="uber", amount=Decimal("-10"), date=RIDE_TIME)


def test_create_trip_manual_booking_fee(trip_service):
    """A manual booking fee is kept where the fee is not fixed."""
    regular = trip_service.create_trip(
        platform="bolt", amount=Decimal("50"), date=RIDE_TIME, booking_fee=Decimal("5")
    )
    airport = trip_service.create_trip(
        platform="bolt",
        amount=Decimal("50"),
        date=RIDE_TIME,
        pickup_location="airport_t1",
        booking_fee=Decimal("5"),
    )
    assert trip_service.get_trip(regular).booking_fee == Decimal("5.00")
    assert trip_service.get_trip(airport).booking_fee == Decimal("25.00")


def test_settings_change_does_not_touch_existing_trips(trip_service, settings_service):
    trip_id = trip_service.create_trip(platform="bolt", amount=Decimal("100"), date=RIDE_TIME)
    settings_service.update_settings(bolt_commission=Decimal("30"))

    assert trip_service.get_trip(trip_id).commission == Decimal("20.00")


def test_require_trip_not_found(trip_service):
    with pytest.raises(NotFoundError):
        trip_service.require_trip("missing")
    assert trip_service.get_trip("missing") is None


def test_update_trip_changes_only_given_fields(trip_service):
    trip_id = trip_service.create_trip(
        platform="uber", amount=Decimal("40"), date=RIDE_TIME, salik_fee=Decimal("4")
    )
    trip = trip_service.update_trip(trip_id, amount=Decimal("45"))

    assert trip.amount == Decimal("45.00")
    assert trip.salik_fee == Decimal("4.00")
    assert trip.platform == "uber"


def test_update_platform_re_evaluates_pickup_fees(trip_service):
    """Switching platform moves an airport pickup from airport fee to booking fee."""
    trip_id = trip_service.create_trip(
        platform="uber", amount=Decimal("100"), date=RIDE_TIME, pickup_location="airport_t1"
    )
    trip = trip_service.update_trip(trip_id, platform="bolt")

    assert trip.airport_fee == Decimal("0")
    assert trip.booking_fee == Decimal("25.00")
    assert trip.commission == Decimal("20.00")


def test_update_pickup_away_from_landmark_resets_fee(trip_service):
    trip_id = trip_service.create_trip(
        platform="bolt", amount=Decimal("60"), date=RIDE_TIME, pickup_location="dubai_mall"
    )
    trip = trip_service.update_trip(trip_id, pickup_location="other")
    assert trip.booking_fee == Decimal("0")


def test_manual_booking_fee_survives_unrelated_edit(trip_service):
    trip_id = trip_service.create_trip(
        platform="bolt", amount=Decimal("60"), date=RIDE_TIME, booking_fee=Decimal("7")
    )
    trip = trip_service.update_trip(trip_id, amount=Decimal("65"))
    assert trip.booking_fee == Decimal("7.00")


def test_manual_booking_fee_cleared_when_location_changes(trip_service):
    trip_id = trip_service.create_trip(
        platform="bolt", amount=Decimal("60"), date=RIDE_TIME, booking_fee=Decimal("7")
    )
    trip = trip_service.update_trip(trip_id, pickup_location="other")
    assert trip.booking_fee == Decimal("0")


def test_update_clears_pickup_location(trip_service):
    trip_id = trip_service.create_trip(
        platform="careem", amount=Decimal("60"), date=RIDE_TIME, pickup_location="airport_t3"
    )
    trip = trip_service.update_trip(trip_id, clear_pickup_location=True)
    assert trip.pickup_location is None
    assert trip.airport_fee == Decimal("0")


def test_update_rejects_conflicting_pickup_arguments(trip_service):
    trip_id = trip_service.create_trip(platform="uber", amount=Decimal("10"), date=RIDE_TIME)
    with pytest.raises(ValidationError):
        trip_service.update_trip(trip_id, pickup_location="other", clear_pickup_location=True)


def test_update_missing_trip(trip_service):
    with pytest.raises(NotFoundError):
        trip_service.update_trip("missing", amount=Decimal("10"))


def test_mark_paid_to_cashier(trip_service):
    trip_id = trip_service.create_trip(
        platform="uber", amount=Decimal("40"), date=RIDE_TIME, payment_method=PaymentMethod.CASH
    )
    trip = trip_service.mark_paid_to_cashier(trip_id)
    assert trip.paid_to_cashier is True

    # Marking again is a no-op
    again = trip_service.mark_paid_to_cashier(trip_id)
    assert again.paid_to_cashier is True


def test_mark_paid_rejects_online_trips(trip_service):
    trip_id = trip_service.create_trip(
        platform="uber",
        amount=Decimal("40"),
        date=RIDE_TIME,
        payment_method=PaymentMethod.ONLINE_PAID,
    )
    with pytest.raises(ValidationError, match="cashier"):
        trip_service.mark_paid_to_cashier(trip_id)


def test_list_trips_newest_first(trip_service, sample_trips):
    trips = trip_service.list_trips()
    assert [t.id for t in trips] == [
        sample_trips["careem_card"],
        sample_trips["uber_cash"],
        sample_trips["bolt_airport"],
    ]


def test_list_trips_with_filter(trip_service, sample_trips):
    trips = trip_service.list_trips(TripFilter(platform="uber"), zone=tz.UTC)
    assert [t.id for t in trips] == [sample_trips["uber_cash"]]


def test_list_trip_page(trip_service, sample_trips):
    page = trip_service.list_trip_page(page=1)
    assert page.total_trips == 3
    assert page.total_pages == 1
    assert page.trips[0].id == sample_trips["careem_card"]


def test_stored_trip_matches_values_fees_were_computed_from(trip_service):
    trip_id = trip_service.create_trip(
        platform="bolt", amount=Decimal("33.33"), date=RIDE_TIME, distance=Decimal("12.35")
    )
    trip = trip_service.get_trip(trip_id)

    assert trip.amount == Decimal("33.33")
    assert trip.distance == Decimal("12.35")
    assert trip.commission == (trip.amount * Decimal("0.2")).quantize(Decimal("0.01"))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": Decimal("33.333")},
        {"amount": Decimal("30"), "distance": Decimal("12.345")},
        {"amount": Decimal("30"), "salik_fee": Decimal("4.001")},
    ],
)
def test_create_trip_rejects_sub_cent_values(trip_service, kwargs):
    with pytest.raises(ValidationError, match="decimal places"):
        trip_service.create_trip(platform="bolt", date=RIDE_TIME, **kwargs)
    assert trip_service.list_trips() == []


def test_update_trip_rejects_sub_cent_amount(trip_service):
    trip_id = trip_service.create_trip(platform="uber", amount=Decimal("30"), date=RIDE_TIME)
    with pytest.raises(ValidationError, match="decimal places"):
        trip_service.update_trip(trip_id, amount=Decimal("30.005"))
    assert trip_service.get_trip(trip_id).amount == Decimal("30")


def test_settled_trip_payment_method_is_locked(trip_service):
    trip_id = trip_service.create_trip(
        platform="uber", amount=Decimal("40"), date=RIDE_TIME, payment_method=PaymentMethod.CASH
    )
    trip_service.mark_paid_to_cashier(trip_id)

    with pytest.raises(ValidationError, match="already paid to the cashier"):
        trip_service.update_trip(trip_id, payment_method=PaymentMethod.ONLINE_PAID)

    trip = trip_service.update_trip(trip_id, amount=Decimal("45"), payment_method=PaymentMethod.CASH)
    assert trip.payment_method == PaymentMethod.CASH
    assert trip.paid_to_cashier is True
