"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ridelog.domain.entities import PaymentMethod, Settings, Trip


class Database(ABC):
    """Abstract database interface for ridelog."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Trip operations
    @abstractmethod
    def create_trip(
        self,
        platform: str,
        amount: Decimal,
        date: datetime,
        distance: Optional[Decimal] = None,
        pickup_location: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        salik_fee: Optional[Decimal] = None,
        airport_fee: Optional[Decimal] = None,
        booking_fee: Optional[Decimal] = None,
        commission: Optional[Decimal] = None,
        fuel_cost: Optional[Decimal] = None,
    ) -> str:
        """Create a trip. Returns the new trip ID."""
        pass

    @abstractmethod
    def get_trip(self, trip_id: str) -> Optional[Trip]:
        """Get trip by ID."""
        pass

    @abstractmethod
    def update_trip(
        self,
        trip_id: str,
        platform: str,
        amount: Decimal,
        date: datetime,
        distance: Optional[Decimal] = None,
        pickup_location: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        salik_fee: Optional[Decimal] = None,
        airport_fee: Optional[Decimal] = None,
        booking_fee: Optional[Decimal] = None,
        commission: Optional[Decimal] = None,
        fuel_cost: Optional[Decimal] = None,
    ) -> None:
        """Replace every editable field of a trip.

        The paid_to_cashier flag is not editable here.
        """
        pass

    @abstractmethod
    def set_paid_to_cashier(self, trip_id: str) -> None:
        """Mark a trip as paid to the cashier."""
        pass

    @abstractmethod
    def list_trips(self, platform: Optional[str] = None) -> list[Trip]:
        """List trips newest first, optionally for a single platform."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Settings:
        """Get user settings, returning defaults if none were saved."""
        pass

    @abstractmethod
    def save_settings(self, settings: Settings) -> None:
        """Persist user settings."""
        pass
