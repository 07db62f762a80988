"""Main CLI entry point."""

import logging

import click
from ridelog.database.factories import create_sqlite_database
from ridelog.domain.periods import resolve_timezone

# Import and register all commands at module level
from ridelog.cli.commands import (
    add,
    trip,
    report,
    settings,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RIDELOG_DB_PATH environment variable)",
    envvar="RIDELOG_DB_PATH",
)
@click.option(
    "--timezone",
    "timezone_name",
    help="Time zone for day grouping, e.g. 'Asia/Dubai' (default: system zone)",
    envvar="RIDELOG_TZ",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="RIDELOG_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, timezone_name: str | None, log_level: str):
    """Ridelog - Rideshare income tracking.

    Record your trips, let platform and airport fees be worked out for you,
    and follow your net income per day, week and billing cycle.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        ctx.obj["zone"] = resolve_timezone(timezone_name)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
trip.register_commands(cli)
report.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
