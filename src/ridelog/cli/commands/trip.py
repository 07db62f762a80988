"""Trip management commands."""

import click
from ridelog.cli.display import echo_trip, money, pretty_identifier
from ridelog.cli.error_handling import handle_domain_error
from ridelog.cli.platform_resolution import resolve_platform_filter_or_exit
from ridelog.cli.commands.add import PAYMENT_CHOICES
from ridelog.domain.entities import PaymentMethod
from ridelog.domain.errors import DomainError
from ridelog.domain.fees import net_income
from ridelog.domain.periods import to_zone
from ridelog.domain.settings import SettingsService
from ridelog.domain.trip import TripService
from ridelog.utils.amount_parser import parse_amount
from ridelog.utils.date_parser import parse_datetime


@click.group("trip")
def trip_group():
    """Manage recorded trips."""
    pass


@trip_group.command("show")
@click.argument("trip_id")
@click.pass_context
def show_trip(ctx, trip_id: str) -> None:
    """Show all details of a trip."""
    service = TripService(ctx.obj["db"])
    try:
        trip = service.require_trip(trip_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_trip(trip, ctx.obj.get("zone"))


@trip_group.command("edit")
@click.argument("trip_id")
@click.option("--platform", help="New platform")
@click.option("--amount", help="New gross fare")
@click.option("--date", help="New ride date and time")
@click.option("--distance", help="New distance in km")
@click.option("--pickup", help="New pickup location, or empty string to clear it")
@click.option("--payment", type=click.Choice(PAYMENT_CHOICES), help="New payment method")
@click.option("--salik", help="New Salik (toll) fee")
@click.option("--booking-fee", help="Manual booking fee for Bolt pickups without a fixed fee")
@click.pass_context
def edit_trip(
    ctx,
    trip_id: str,
    platform: str | None,
    amount: str | None,
    date: str | None,
    distance: str | None,
    pickup: str | None,
    payment: str | None,
    salik: str | None,
    booking_fee: str | None,
) -> None:
    """Edit a trip.

    Updates only the fields that are provided and recomputes the platform
    fees. Use --pickup "" to clear the pickup location.

    Examples:
        ridelog trip edit 3f2a... --amount 92.50
        ridelog trip edit 3f2a... --platform uber --pickup airport_t1
    """
    service = TripService(ctx.obj["db"])

    ride_time = None
    if date is not None:
        try:
            ride_time = parse_datetime(date, zone=ctx.obj.get("zone"))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        fare = parse_amount(amount) if amount is not None else None
        km = parse_amount(distance) if distance is not None else None
        salik_fee = parse_amount(salik) if salik is not None else None
        manual_booking_fee = parse_amount(booking_fee) if booking_fee is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    clear_pickup = pickup is not None and pickup.strip() == ""

    try:
        trip = service.update_trip(
            trip_id,
            platform=platform,
            amount=fare,
            date=ride_time,
            distance=km,
            pickup_location=None if clear_pickup else pickup,
            payment_method=PaymentMethod(payment) if payment else None,
            salik_fee=salik_fee,
            booking_fee=manual_booking_fee,
            clear_pickup_location=clear_pickup,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated trip {trip_id}")
    echo_trip(trip, ctx.obj.get("zone"))


@trip_group.command("paid")
@click.argument("trip_id")
@click.pass_context
def mark_paid(ctx, trip_id: str) -> None:
    """Mark a cash or card trip as paid to the cashier."""
    service = TripService(ctx.obj["db"])
    try:
        trip = service.mark_paid_to_cashier(trip_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Trip {trip.id} marked as paid to cashier ({money(trip.amount)})")


@trip_group.command("list")
@click.option("--platform", help="Only show trips for this platform ('all' for every platform)")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.pass_context
def list_trips(ctx, platform: str | None, page: int) -> None:
    """List recorded trips, newest first."""
    db = ctx.obj["db"]
    zone = ctx.obj.get("zone")
    platform = resolve_platform_filter_or_exit(ctx, SettingsService(db), platform)
    trip_page = TripService(db).list_trip_page(page=page, platform=platform)

    if not trip_page.trips:
        click.echo("No trips found.")
        return

    click.echo(f"\nFound {trip_page.total_trips} trip(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<34} {'Date':<17} {'Platform':<10} {'Payment':<12} {'Gross':>16} {'Net':>16}"
    )
    click.echo("-" * 110)
    for trip in trip_page.trips:
        payment = pretty_identifier(trip.payment_method.value if trip.payment_method else None)
        click.echo(
            f"{trip.id:<34} {to_zone(trip.date, zone):%Y-%m-%d %H:%M} "
            f"{pretty_identifier(trip.platform):<10} {payment:<12} "
            f"{money(trip.amount):>16} {money(net_income(trip)):>16}"
        )
    if trip_page.total_pages > 1:
        click.echo(f"\nPage {trip_page.page} of {trip_page.total_pages}")


def register_commands(cli):
    """Register trip commands with main CLI."""
    cli.add_command(trip_group)
