"""Add trip command."""

import click
from ridelog.cli.display import echo_trip
from ridelog.cli.error_handling import handle_domain_error
from ridelog.domain.entities import PaymentMethod
from ridelog.domain.errors import DomainError
from ridelog.domain.trip import TripService
from ridelog.utils.amount_parser import parse_amount
from ridelog.utils.date_parser import parse_datetime

PAYMENT_CHOICES = [method.value for method in PaymentMethod]


@click.command("add")
@click.option("--platform", required=True, help="Platform (bolt, uber, careem, dtc or a custom one)")
@click.option("--amount", required=True, help="Gross fare (e.g., 25.50)")
@click.option(
    "--date",
    default="now",
    show_default=True,
    help="Ride date and time (e.g., '2024-06-01 18:30', 'yesterday', 'now')",
)
@click.option("--distance", help="Distance in km")
@click.option("--pickup", help="Pickup location (e.g., airport_t1, dubai_mall or a custom one)")
@click.option("--payment", type=click.Choice(PAYMENT_CHOICES), help="Payment method")
@click.option("--salik", help="Salik (toll) fee")
@click.option("--booking-fee", help="Manual booking fee for Bolt pickups without a fixed fee")
@click.pass_context
def add_trip(
    ctx,
    platform: str,
    amount: str,
    date: str,
    distance: str | None,
    pickup: str | None,
    payment: str | None,
    salik: str | None,
    booking_fee: str | None,
):
    """Record a trip.

    Commission, booking fee, airport fee and fuel cost are worked out from
    the platform, pickup location, fare and distance.

    Examples:
        ridelog add --platform bolt --amount 85 --pickup airport_t2 --distance 32
        ridelog add --platform uber --amount 40 --payment cash --salik 4
    """
    db = ctx.obj["db"]
    trip_service = TripService(db)

    try:
        ride_time = parse_datetime(date, zone=ctx.obj.get("zone"))
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        fare = parse_amount(amount)
        km = parse_amount(distance) if distance else None
        salik_fee = parse_amount(salik) if salik else None
        manual_booking_fee = parse_amount(booking_fee) if booking_fee else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        trip_id = trip_service.create_trip(
            platform=platform,
            amount=fare,
            date=ride_time,
            distance=km,
            pickup_location=pickup,
            payment_method=PaymentMethod(payment) if payment else None,
            salik_fee=salik_fee,
            booking_fee=manual_booking_fee,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created trip {trip_id}")
    echo_trip(trip_service.require_trip(trip_id), ctx.obj.get("zone"))


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_trip)
