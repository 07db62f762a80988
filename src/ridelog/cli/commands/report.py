"""Report commands."""

from datetime import datetime

import click
from dateutil import tz

from ridelog.cli.date_filters import period_option, resolve_cli_date_range
from ridelog.cli.display import (
    echo_bucket_breakdown,
    echo_report_table,
    money,
    pretty_identifier,
)
from ridelog.cli.error_handling import handle_domain_error
from ridelog.cli.platform_resolution import resolve_platform_filter_or_exit
from ridelog.domain.aggregation import MONTHLY_INSIGHT
from ridelog.domain.entities import PaymentMethod
from ridelog.domain.errors import DomainError
from ridelog.domain.fees import net_income
from ridelog.domain.periods import REFERENCE_TIMEZONE, local_date, to_zone
from ridelog.domain.report import ReportService
from ridelog.domain.settings import SettingsService
from ridelog.utils.date_parser import parse_date

platform_option = click.option(
    "--platform", help="Only include this platform ('all' for every platform)"
)


def _report_service(ctx) -> ReportService:
    return ReportService(ctx.obj["db"], zone=ctx.obj.get("zone"))


def _platform_filter(ctx, platform: str | None) -> str | None:
    return resolve_platform_filter_or_exit(ctx, SettingsService(ctx.obj["db"]), platform)


@click.group("report")
def report_group():
    """Income reports."""
    pass


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx) -> None:
    """Month-to-date net income, goal progress and recent trips."""
    service = _report_service(ctx)
    overview = service.dashboard()
    zone = ctx.obj.get("zone")

    click.echo("\nDashboard")
    click.echo("=" * 51)
    click.echo(f"{'This month net':<30} {money(overview.month_net):>20}")
    click.echo(f"{'Total net':<30} {money(overview.total_net):>20}")
    click.echo(f"{'Average daily net':<30} {money(overview.average_daily_net):>20}")
    click.echo(f"{'Active days':<30} {overview.active_days:>20}")
    click.echo(f"{'Monthly goal':<30} {money(overview.monthly_goal):>20}")
    click.echo(f"{'Goal progress':<30} {f'{overview.goal_progress}%':>20}")

    click.echo("\nRecent trips:")
    if not overview.recent_trips:
        click.echo("  No trips recorded yet.")
        return
    for trip in overview.recent_trips:
        click.echo(
            f"  {to_zone(trip.date, zone):%Y-%m-%d %H:%M}  "
            f"{pretty_identifier(trip.platform):<10} {money(net_income(trip)):>16}"
        )


@report_group.command("day")
@click.argument("day", required=False)
@platform_option
@click.pass_context
def day_report(ctx, day: str | None, platform: str | None) -> None:
    """Fee breakdown for a single day (Dubai time).

    DAY defaults to today and accepts dates like 2024-06-01 or 'yesterday'.
    """
    today = local_date(datetime.now(tz.UTC), REFERENCE_TIMEZONE)
    target = today
    if day:
        try:
            target = parse_date(day, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    platform = _platform_filter(ctx, platform)
    report = _report_service(ctx).day(target, platform=platform)
    click.echo(f"\nDay report for {target.isoformat()}")
    click.echo("=" * 51)
    echo_bucket_breakdown(report.buckets[0])


@report_group.command("daily")
@platform_option
@click.pass_context
def daily_report(ctx, platform: str | None) -> None:
    """One row per day with trips, newest first."""
    platform = _platform_filter(ctx, platform)
    report = _report_service(ctx).daily(platform=platform)
    if not report.buckets:
        click.echo("No trips found.")
        return
    echo_report_table(report, "Daily income")


@report_group.command("weekly")
@platform_option
@click.pass_context
def weekly_report(ctx, platform: str | None) -> None:
    """Last twelve weeks (Monday to Sunday), oldest first."""
    platform = _platform_filter(ctx, platform)
    report = _report_service(ctx).weekly(platform=platform)
    echo_report_table(report, "Weekly income")


@report_group.command("monthly")
@platform_option
@click.option(
    "--calendar",
    is_flag=True,
    help="Group by calendar month instead of the 21st-to-20th billing cycle",
)
@click.pass_context
def monthly_report(ctx, platform: str | None, calendar: bool) -> None:
    """Last twelve billing cycles (21st to 20th), oldest first."""
    platform = _platform_filter(ctx, platform)
    report = _report_service(ctx).monthly(platform=platform, calendar=calendar)
    title = "Monthly income" if calendar else "Monthly income (billing cycles)"
    echo_report_table(report, title)
    click.echo(f"\n{MONTHLY_INSIGHT}")


@report_group.command("custom")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last week')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_option
@platform_option
@click.pass_context
def custom_report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    platform: str | None,
) -> None:
    """Fee breakdown for a date range.

    Defaults to the current month when no range is given.

    Examples:
        ridelog report custom --period last-cycle
        ridelog report custom --start-date 2024-06-01 --end-date 2024-06-15 --platform bolt
    """
    service = _report_service(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period=period,
        today=service.today(),
    )
    platform = _platform_filter(ctx, platform)

    try:
        report = service.custom(start, end, platform=platform)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nIncome from {start.isoformat()} to {end.isoformat()}")
    if platform:
        click.echo(f"Platform: {pretty_identifier(platform)}")
    click.echo("=" * 51)
    echo_bucket_breakdown(report.buckets[0])


@report_group.command("payments")
@click.pass_context
def payments_report(ctx) -> None:
    """Gross income by payment method and cashier settlement state."""
    breakdown = _report_service(ctx).payments()
    methods = list(PaymentMethod)

    header = f"{'Platform':<12}" + "".join(
        f"{pretty_identifier(m.value):>18}" for m in methods
    )
    click.echo("\nPayments by platform:")
    click.echo("-" * len(header))
    click.echo(header)
    click.echo("-" * len(header))
    for platform, totals in sorted(breakdown.by_platform.items()):
        click.echo(
            f"{pretty_identifier(platform):<12}"
            + "".join(f"{money(totals[m]):>18}" for m in methods)
        )
    click.echo("-" * len(header))
    click.echo(
        f"{'TOTAL':<12}" + "".join(f"{money(breakdown.totals[m]):>18}" for m in methods)
    )

    click.echo("\nCashier:")
    click.echo(f"  {'Paid to cashier':<20} {money(breakdown.cashier.paid):>16}")
    click.echo(f"  {'Pending':<20} {money(breakdown.cashier.pending):>16}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group)
