"""SQLAlchemy models for the ridelog database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

SETTINGS_ROW_ID = 1


class TripRecord(Base):
    """Recorded trip model.

    Timestamps are stored as naive UTC.
    """

    __tablename__ = "trips"

    id = Column(String(32), primary_key=True)
    platform = Column(String, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    distance = Column(Numeric(10, 2), nullable=True)
    pickup_location = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)
    paid_to_cashier = Column(Boolean, default=False, nullable=False)
    salik_fee = Column(Numeric(10, 2), nullable=True)
    airport_fee = Column(Numeric(10, 2), nullable=True)
    booking_fee = Column(Numeric(10, 2), nullable=True)
    commission = Column(Numeric(10, 2), nullable=True)
    fuel_cost = Column(Numeric(10, 2), nullable=True)
    created_at = Column(
        DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None), nullable=False
    )


class SettingsRecord(Base):
    """Single-row user settings model."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    monthly_goal = Column(Numeric(10, 2), nullable=False)
    bolt_commission = Column(Numeric(5, 2), nullable=False)
    fuel_cost_per_km = Column(Numeric(10, 4), nullable=False)
    full_name = Column(String, nullable=False, default="")
    custom_platforms = Column(JSON, nullable=False, default=list)
    custom_pickup_locations = Column(JSON, nullable=False, default=list)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC).replace(tzinfo=None),
        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
