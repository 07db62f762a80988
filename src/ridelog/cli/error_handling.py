"""Turning domain errors into CLI failures."""

import logging

import click

from ridelog.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print the error on stderr and stop the command with exit code 1."""
    logger.debug("%s in '%s': %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
