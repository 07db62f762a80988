"""Tests for fee rules."""

from datetime import datetime
from decimal import Decimal

import pytest
from dateutil import tz

from ridelog.domain.entities import FeeOverride, Settings, TripDraft
from ridelog.domain.errors import ValidationError
from ridelog.domain.fees import (
    apply_fee_defaults,
    compute_fee_defaults,
    net_income,
    resolve_fees,
)


def _defaults(platform, pickup=None, amount="100", distance=None, settings=None):
    return compute_fee_defaults(
        platform=platform,
        pickup_location=pickup,
        amount=Decimal(amount),
        distance=Decimal(distance) if distance is not None else None,
        settings=settings or Settings(),
    )


def _draft(**overrides):
    values = dict(
        platform="bolt",
        amount=Decimal("100"),
        date=datetime(2024, 6, 1, 10, 0, tzinfo=tz.UTC),
    )
    values.update(overrides)
    return TripDraft(**values)


def test_bolt_commission_is_percentage_of_fare():
    """Bolt takes the configured commission percentage."""
    fees = _defaults("bolt", settings=Settings(bolt_commission=Decimal("20")))
    assert fees.commission == Decimal("20.00")


def test_other_platforms_have_no_commission():
    fees = _defaults("uber", settings=Settings(bolt_commission=Decimal("20")))
    assert fees.commission == Decimal("0")


def test_commission_is_rounded_half_up():
    fees = _defaults("bolt", amount="10.25", settings=Settings(bolt_commission=Decimal("10")))
    # 1.025 rounds up
    assert fees.commission == Decimal("1.03")


def test_bolt_airport_pickup_charges_booking_fee_not_airport_fee():
    fees = _defaults("bolt", pickup="airport_t2")
    assert fees.booking_fee == Decimal("25")
    assert fees.airport_fee == Decimal("0")
    assert fees.booking_fee_editable is False


def test_bolt_landmark_pickup_charges_landmark_booking_fee():
    fees = _defaults("bolt", pickup="dubai_mall")
    assert fees.booking_fee == Decimal("16")
    assert fees.airport_fee == Decimal("0")


def test_bolt_regular_pickup_has_editable_zero_booking_fee():
    fees = _defaults("bolt", pickup="other")
    assert fees.booking_fee == Decimal("0")
    assert fees.booking_fee_editable is True


def test_non_bolt_airport_pickup_charges_airport_fee():
    fees = _defaults("uber", pickup="airport_t1")
    assert fees.airport_fee == Decimal("20")
    assert fees.booking_fee == Decimal("0")
    assert fees.booking_fee_editable is False


def test_non_bolt_landmark_pickup_has_no_fees():
    fees = _defaults("careem", pickup="global_village")
    assert fees.airport_fee == Decimal("0")
    assert fees.booking_fee == Decimal("0")


def test_unknown_platform_and_location_fall_through_to_zero():
    fees = _defaults("my_limo", pickup="marina_walk")
    assert fees.commission == Decimal("0")
    assert fees.airport_fee == Decimal("0")
    assert fees.booking_fee == Decimal("0")


def test_fuel_cost_from_distance():
    settings = Settings(fuel_cost_per_km=Decimal("0.29"))
    assert _defaults("uber", distance="50", settings=settings).fuel_cost == Decimal("14.50")
    assert _defaults("uber", distance="0", settings=settings).fuel_cost == Decimal("0")
    assert _defaults("uber", distance=None, settings=settings).fuel_cost == Decimal("0")


def test_fee_defaults_are_idempotent(settings):
    first = _defaults("bolt", pickup="airport_t3", amount="87.65", distance="12.3", settings=settings)
    second = _defaults("bolt", pickup="airport_t3", amount="87.65", distance="12.3", settings=settings)
    assert first == second


@pytest.mark.parametrize("field", ["amount", "distance"])
def test_negative_inputs_are_rejected(field):
    kwargs = {"amount": "100", "distance": "10"}
    kwargs[field] = "-1"
    with pytest.raises(ValidationError):
        _defaults("uber", **kwargs)


def test_override_applies_only_when_booking_fee_is_editable():
    editable = _defaults("bolt", pickup="other")
    fixed = _defaults("bolt", pickup="airport_t1")
    override = FeeOverride(booking_fee=Decimal("7.5"))

    assert resolve_fees(editable, override).booking_fee == Decimal("7.50")
    assert resolve_fees(fixed, override).booking_fee == Decimal("25")


def test_empty_override_keeps_defaults():
    defaults = _defaults("bolt", pickup="other")
    assert resolve_fees(defaults, FeeOverride()) == defaults
    assert resolve_fees(defaults, None) == defaults


def test_apply_fee_defaults_fills_every_fee(settings):
    draft = _draft(pickup_location="airport_t2", distance=Decimal("50"), salik_fee=Decimal("4"))
    result = apply_fee_defaults(draft, settings)

    assert result.commission == Decimal("20.00")
    assert result.booking_fee == Decimal("25")
    assert result.airport_fee == Decimal("0")
    assert result.fuel_cost == Decimal("14.50")
    assert result.salik_fee == Decimal("4.00")


def test_apply_fee_defaults_defaults_salik_to_zero(settings):
    result = apply_fee_defaults(_draft(platform="uber"), settings)
    assert result.salik_fee == Decimal("0")


def test_apply_fee_defaults_rejects_negative_salik(settings):
    with pytest.raises(ValidationError):
        apply_fee_defaults(_draft(salik_fee=Decimal("-2")), settings)


def test_switching_platform_re_evaluates_airport_rule(settings):
    """The same airport pickup moves between booking fee and airport fee."""
    as_uber = apply_fee_defaults(_draft(platform="uber", pickup_location="airport_t1"), settings)
    as_bolt = apply_fee_defaults(_draft(platform="bolt", pickup_location="airport_t1"), settings)

    assert (as_uber.airport_fee, as_uber.booking_fee) == (Decimal("20"), Decimal("0"))
    assert (as_bolt.airport_fee, as_bolt.booking_fee) == (Decimal("0"), Decimal("25"))


def test_net_income_subtracts_every_fee(make_trip):
    trip = make_trip(
        amount="100",
        salik_fee="4",
        airport_fee="20",
        booking_fee="0",
        commission="5.5",
        fuel_cost="3.25",
    )
    assert net_income(trip) == Decimal("67.25")


def test_net_income_treats_missing_fees_as_zero(make_trip):
    assert net_income(make_trip(amount="42.10")) == Decimal("42.10")


def test_net_income_is_not_clamped(make_trip):
    trip = make_trip(amount="10", airport_fee="20")
    assert net_income(trip) == Decimal("-10")
