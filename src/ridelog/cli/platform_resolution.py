"""CLI helpers for platform and pickup location resolution."""

from __future__ import annotations

import click
from ridelog.domain.settings import SettingsService
from ridelog.utils.identifier_resolver import resolve_platform


def resolve_platform_filter_or_exit(
    ctx: click.Context, settings_service: SettingsService, platform: str | None
) -> str | None:
    """Resolve a --platform filter value, or exit with a CLI error.

    None and "all" both mean every platform and resolve to None.
    """
    if platform is None or platform.strip().lower() == "all":
        return None
    try:
        return resolve_platform(settings_service.get_settings(), platform)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
