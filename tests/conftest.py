"""Shared pytest fixtures for ridelog tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal

import pytest
from dateutil import tz

from ridelog.database.factories import create_sqlite_database
from ridelog.domain.entities import PaymentMethod, Settings, Trip
from ridelog.domain.report import ReportService
from ridelog.domain.settings import SettingsService
from ridelog.domain.trip import TripService

_DECIMAL_FIELDS = {
    "distance",
    "salik_fee",
    "airport_fee",
    "booking_fee",
    "commission",
    "fuel_cost",
}


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def trip_service(temp_db):
    """Create a TripService with a temporary database."""
    return TripService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService that groups days in UTC."""
    return ReportService(temp_db, zone=tz.UTC)


@pytest.fixture
def settings():
    """Settings with a known commission and fuel rate."""
    return Settings(
        monthly_goal=Decimal("2000"),
        bolt_commission=Decimal("20"),
        fuel_cost_per_km=Decimal("0.29"),
    )


@pytest.fixture
def make_trip():
    """Build in-memory trips with sensible defaults."""
    counter = {"n": 0}

    def _make(
        platform="uber",
        amount="50",
        date=datetime(2024, 6, 10, 12, 0, tzinfo=tz.UTC),
        **fees,
    ) -> Trip:
        counter["n"] += 1
        values = {
            key: Decimal(str(value)) if key in _DECIMAL_FIELDS and value is not None else value
            for key, value in fees.items()
        }
        return Trip(
            id=f"trip-{counter['n']}",
            platform=platform,
            amount=Decimal(amount),
            date=date,
            **values,
        )

    return _make


@pytest.fixture
def sample_trips(trip_service):
    """Record a handful of trips across platforms and payment methods."""
    ids = {}
    ids["bolt_airport"] = trip_service.create_trip(
        platform="bolt",
        amount=Decimal("100"),
        date=datetime(2024, 6, 3, 8, 0, tzinfo=tz.UTC),
        distance=Decimal("30"),
        pickup_location="airport_t2",
        payment_method=PaymentMethod.ONLINE_PAID,
    )
    ids["uber_cash"] = trip_service.create_trip(
        platform="uber",
        amount=Decimal("40"),
        date=datetime(2024, 6, 3, 15, 30, tzinfo=tz.UTC),
        payment_method=PaymentMethod.CASH,
        salik_fee=Decimal("4"),
    )
    ids["careem_card"] = trip_service.create_trip(
        platform="careem",
        amount=Decimal("60"),
        date=datetime(2024, 6, 5, 20, 0, tzinfo=tz.UTC),
        pickup_location="airport_t1",
        payment_method=PaymentMethod.CREDIT_CARD,
    )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
