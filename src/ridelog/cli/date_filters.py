"""CLI helpers for date range resolution."""

from datetime import date

import click

from ridelog.utils.date_parser import PERIODS, get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    today: date | None = None,
) -> tuple[date, date]:
    """Resolve a report date range from a named period or explicit dates.

    Without any option the range is the current month up to today. A missing
    start or end date defaults to today.
    """
    today = today or date.today()

    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period, today=today)

    if not start_date and not end_date:
        return get_date_range("this-month", today=today)

    start = end = today
    if start_date:
        try:
            start = parse_date(start_date, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start > end:
        click.echo(f"Error: Start date {start} is after end date {end}.", err=True)
        ctx.exit(1)

    return start, end


period_option = click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    help="Named period (cannot be combined with --start-date/--end-date)",
)
