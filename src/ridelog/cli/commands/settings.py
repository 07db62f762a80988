"""Settings commands."""

import click
from ridelog.cli.display import money
from ridelog.cli.error_handling import handle_domain_error
from ridelog.domain.errors import DomainError
from ridelog.domain.settings import SettingsService
from ridelog.utils.amount_parser import parse_amount


@click.group("settings")
def settings_group():
    """View and change settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx) -> None:
    """Show current settings."""
    settings = SettingsService(ctx.obj["db"]).get_settings()
    click.echo(f"Name: {settings.full_name or '-'}")
    click.echo(f"Monthly goal: {money(settings.monthly_goal)}")
    click.echo(f"Bolt commission: {settings.bolt_commission}%")
    click.echo(f"Fuel cost per km: {money(settings.fuel_cost_per_km)}")
    click.echo(f"Platforms: {', '.join(settings.platforms)}")
    click.echo(f"Pickup locations: {', '.join(settings.pickup_locations)}")


@settings_group.command("set")
@click.option("--goal", help="Monthly net income goal")
@click.option("--bolt-commission", help="Bolt commission percentage (0-100)")
@click.option("--fuel-cost", help="Fuel cost per km")
@click.option("--name", help="Your name")
@click.pass_context
def set_settings(
    ctx,
    goal: str | None,
    bolt_commission: str | None,
    fuel_cost: str | None,
    name: str | None,
) -> None:
    """Update settings.

    Changes apply to trips recorded from now on; existing trips keep their fees.
    """
    if goal is None and bolt_commission is None and fuel_cost is None and name is None:
        click.echo("Error: Nothing to update. Pass at least one option.", err=True)
        ctx.exit(1)

    try:
        monthly_goal = parse_amount(goal) if goal is not None else None
        commission = parse_amount(bolt_commission.rstrip("%")) if bolt_commission is not None else None
        fuel_rate = parse_amount(fuel_cost) if fuel_cost is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid number: {e}", err=True)
        ctx.exit(1)

    try:
        SettingsService(ctx.obj["db"]).update_settings(
            monthly_goal=monthly_goal,
            bolt_commission=commission,
            fuel_cost_per_km=fuel_rate,
            full_name=name,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Settings updated.")


@settings_group.command("add-platform")
@click.argument("name")
@click.pass_context
def add_platform(ctx, name: str) -> None:
    """Add a custom platform."""
    try:
        SettingsService(ctx.obj["db"]).add_custom_platform(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added platform '{name.strip()}'")


@settings_group.command("remove-platform")
@click.argument("name")
@click.pass_context
def remove_platform(ctx, name: str) -> None:
    """Remove a custom platform. Recorded trips are kept."""
    try:
        SettingsService(ctx.obj["db"]).remove_custom_platform(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed platform '{name}'")


@settings_group.command("add-location")
@click.argument("name")
@click.pass_context
def add_location(ctx, name: str) -> None:
    """Add a custom pickup location."""
    try:
        SettingsService(ctx.obj["db"]).add_custom_pickup_location(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added pickup location '{name.strip()}'")


@settings_group.command("remove-location")
@click.argument("name")
@click.pass_context
def remove_location(ctx, name: str) -> None:
    """Remove a custom pickup location."""
    try:
        SettingsService(ctx.obj["db"]).remove_custom_pickup_location(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed pickup location '{name}'")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group)
