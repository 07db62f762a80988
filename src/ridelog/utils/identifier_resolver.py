"""Utility for resolving platform and pickup location names."""

from typing import Optional, Sequence

from ridelog.domain.entities import Settings
from ridelog.domain.errors import (
    ValidationError,
    unknown_pickup_location,
    unknown_platform,
)


def normalize_identifier(name: str) -> str:
    """Normalize a user-typed identifier ("Dubai Mall" -> "dubai_mall")."""
    return "_".join(name.strip().lower().replace("-", " ").split())


def match_identifier(name: str, allowed: Sequence[str]) -> Optional[str]:
    """Find the allowed identifier matching a name.

    Exact matches win; otherwise names are compared in normalized form so
    "Dubai Mall" finds "dubai_mall" and "bolt" finds "Bolt".

    Returns:
        The matching identifier as stored, or None
    """
    if name in allowed:
        return name
    wanted = normalize_identifier(name)
    for candidate in allowed:
        if normalize_identifier(candidate) == wanted:
            return candidate
    return None


def resolve_platform(settings: Settings, platform: str) -> str:
    """Resolve a platform name against built-in and custom platforms.

    Raises:
        ValidationError: If the platform is not known
    """
    resolved = match_identifier(platform, settings.platforms)
    if resolved is None:
        raise ValidationError(unknown_platform(platform))
    return resolved


def resolve_pickup_location(settings: Settings, location: Optional[str]) -> Optional[str]:
    """Resolve a pickup location name; None and empty strings mean no location.

    Raises:
        ValidationError: If the location is not known
    """
    if location is None or not location.strip():
        return None
    resolved = match_identifier(location, settings.pickup_locations)
    if resolved is None:
        raise ValidationError(unknown_pickup_location(location))
    return resolved
