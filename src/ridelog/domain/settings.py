"""Settings domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from ridelog.database.base import Database
from ridelog.domain.entities import (
    BUILTIN_PICKUP_LOCATIONS,
    BUILTIN_PLATFORMS,
    Settings,
)
from ridelog.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    custom_entry_not_found,
    duplicate_custom_entry,
)
from ridelog.domain.money import require_max_places
from ridelog.utils.identifier_resolver import match_identifier

# Decimal places kept by the settings columns
MONEY_PLACES = 2
COMMISSION_PLACES = 2
FUEL_RATE_PLACES = 4

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for reading and updating user settings."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_settings(self) -> Settings:
        """Get current settings (defaults if never saved)."""
        return self.db.get_settings()

    def update_settings(
        self,
        monthly_goal: Optional[Decimal] = None,
        bolt_commission: Optional[Decimal] = None,
        fuel_cost_per_km: Optional[Decimal] = None,
        full_name: Optional[str] = None,
    ) -> Settings:
        """Update the provided settings fields.

        New values only affect fees computed from now on; recorded trips keep
        the fees they were stored with.

        Args:
            monthly_goal: Optional monthly net income goal (>= 0)
            bolt_commission: Optional Bolt commission percentage (0-100)
            fuel_cost_per_km: Optional fuel cost per km (>= 0)
            full_name: Optional display name

        Returns:
            Updated settings

        Raises:
            ValidationError: If a value is out of range or has more decimal
                places than can be stored (2 for goal and commission, 4 for
                the fuel rate)
        """
        if monthly_goal is not None and monthly_goal < 0:
            raise ValidationError("Monthly goal must be a positive number")
        if bolt_commission is not None and not 0 <= bolt_commission <= 100:
            raise ValidationError("Commission must be between 0 and 100")
        if fuel_cost_per_km is not None and fuel_cost_per_km < 0:
            raise ValidationError("Fuel cost per km must not be negative")
        require_max_places("monthly_goal", monthly_goal, MONEY_PLACES)
        require_max_places("bolt_commission", bolt_commission, COMMISSION_PLACES)
        require_max_places("fuel_cost_per_km", fuel_cost_per_km, FUEL_RATE_PLACES)

        settings = self.db.get_settings()
        changes = {}
        if monthly_goal is not None:
            changes["monthly_goal"] = monthly_goal
        if bolt_commission is not None:
            changes["bolt_commission"] = bolt_commission
        if fuel_cost_per_km is not None:
            changes["fuel_cost_per_km"] = fuel_cost_per_km
        if full_name is not None:
            changes["full_name"] = full_name.strip()

        self.db.save_settings(replace(settings, **changes))
        if changes:
            logger.info("Updated settings: %s", ", ".join(sorted(changes)))
        return self.db.get_settings()

    def available_platforms(self) -> tuple[str, ...]:
        return self.get_settings().platforms

    def available_pickup_locations(self) -> tuple[str, ...]:
        return self.get_settings().pickup_locations

    def add_custom_platform(self, name: str) -> Settings:
        """Add a custom platform.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the platform already exists
        """
        settings = self.get_settings()
        name = self._clean_name("Platform", name)
        if match_identifier(name, settings.platforms) is not None:
            raise ConflictError(duplicate_custom_entry("Platform", name))

        updated = replace(settings, custom_platforms=settings.custom_platforms + (name,))
        self.db.save_settings(updated)
        logger.info("Added custom platform '%s'", name)
        return updated

    def remove_custom_platform(self, name: str) -> Settings:
        """Remove a custom platform. Built-in platforms cannot be removed.

        Trips already recorded for the platform are kept.

        Raises:
            NotFoundError: If no custom platform has that name
        """
        settings = self.get_settings()
        existing = match_identifier(name, settings.custom_platforms)
        if existing is None or existing in BUILTIN_PLATFORMS:
            raise NotFoundError(custom_entry_not_found("Platform", name))

        updated = replace(
            settings,
            custom_platforms=tuple(p for p in settings.custom_platforms if p != existing),
        )
        self.db.save_settings(updated)
        logger.info("Removed custom platform '%s'", existing)
        return updated

    def add_custom_pickup_location(self, name: str) -> Settings:
        """Add a custom pickup location.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the location already exists
        """
        settings = self.get_settings()
        name = self._clean_name("Pickup location", name)
        if match_identifier(name, settings.pickup_locations) is not None:
            raise ConflictError(duplicate_custom_entry("Pickup location", name))

        updated = replace(
            settings,
            custom_pickup_locations=settings.custom_pickup_locations + (name,),
        )
        self.db.save_settings(updated)
        logger.info("Added custom pickup location '%s'", name)
        return updated

    def remove_custom_pickup_location(self, name: str) -> Settings:
        """Remove a custom pickup location.

        Raises:
            NotFoundError: If no custom location has that name
        """
        settings = self.get_settings()
        existing = match_identifier(name, settings.custom_pickup_locations)
        if existing is None or existing in BUILTIN_PICKUP_LOCATIONS:
            raise NotFoundError(custom_entry_not_found("Pickup location", name))

        updated = replace(
            settings,
            custom_pickup_locations=tuple(
                loc for loc in settings.custom_pickup_locations if loc != existing
            ),
        )
        self.db.save_settings(updated)
        logger.info("Removed custom pickup location '%s'", existing)
        return updated

    @staticmethod
    def _clean_name(kind: str, name: str) -> str:
        cleaned = name.strip() if name else ""
        if not cleaned:
            raise ValidationError(f"{kind} name must not be empty")
        return cleaned
