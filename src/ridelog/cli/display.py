"""Shared CLI rendering helpers."""

from decimal import Decimal
from typing import Optional

import click

from ridelog.domain.entities import BucketSummary, Report, Trip
from ridelog.domain.fees import net_income
from ridelog.domain.periods import to_zone

CURRENCY = "AED"


def money(value: Optional[Decimal]) -> str:
    """Format an amount with the display currency."""
    return f"{CURRENCY} {Decimal(value or 0):,.2f}"


def pretty_identifier(name: Optional[str]) -> str:
    """Turn an identifier like 'airport_t1' into 'Airport T1'."""
    if not name:
        return "N/A"
    return name.replace("_", " ").title()


def echo_trip(trip: Trip, zone=None) -> None:
    """Print every field of a trip."""
    click.echo(f"Trip ID: {trip.id}")
    click.echo(f"  Date: {to_zone(trip.date, zone):%Y-%m-%d %H:%M}")
    click.echo(f"  Platform: {pretty_identifier(trip.platform)}")
    click.echo(f"  Gross: {money(trip.amount)}")
    if trip.distance is not None:
        click.echo(f"  Distance: {trip.distance} km")
    click.echo(f"  Pickup: {pretty_identifier(trip.pickup_location)}")
    payment = trip.payment_method.value if trip.payment_method else None
    click.echo(f"  Payment: {pretty_identifier(payment)}")
    if trip.payment_method is not None and trip.payment_method.settles_with_cashier:
        click.echo(f"  Paid to cashier: {'yes' if trip.paid_to_cashier else 'no'}")
    click.echo(f"  Salik fee: {money(trip.salik_fee)}")
    click.echo(f"  Airport fee: {money(trip.airport_fee)}")
    click.echo(f"  Booking fee: {money(trip.booking_fee)}")
    click.echo(f"  Commission: {money(trip.commission)}")
    click.echo(f"  Fuel cost: {money(trip.fuel_cost)}")
    click.echo(f"  Net income: {money(net_income(trip))}")


def echo_bucket_breakdown(bucket: BucketSummary) -> None:
    """Print the fee breakdown of a single bucket."""
    rows = [
        ("Rides", str(bucket.ride_count)),
        ("Distance", f"{bucket.distance_total:,.2f} km"),
        ("Gross income", money(bucket.gross_total)),
        ("Salik fees", money(bucket.salik_fee_total)),
        ("Airport fees", money(bucket.airport_fee_total)),
        ("Booking fees", money(bucket.booking_fee_total)),
        ("Commission", money(bucket.commission_total)),
        ("Fuel cost", money(bucket.fuel_cost_total)),
    ]
    for name, value in rows:
        click.echo(f"{name:<30} {value:>20}")
    click.echo("-" * 51)
    click.echo(f"{'Net income':<30} {money(bucket.net_total):>20}")


def echo_report_table(report: Report, title: str) -> None:
    """Print one row per bucket with counts, gross, fees and net."""
    click.echo(f"\n{title}:")
    click.echo("-" * 80)
    click.echo(f"{'Period':<14} {'Rides':>6} {'Gross':>18} {'Fees':>18} {'Net':>18}")
    click.echo("-" * 80)
    for bucket in report.buckets:
        click.echo(
            f"{bucket.label:<14} {bucket.ride_count:>6} {money(bucket.gross_total):>18} "
            f"{money(bucket.fee_total):>18} {money(bucket.net_total):>18}"
        )
    click.echo("-" * 80)
    click.echo(f"{'TOTAL':<14} {report.total_rides:>6} {'':>18} {'':>18} {money(report.total_net):>18}")
