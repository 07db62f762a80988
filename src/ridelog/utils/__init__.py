"""Utility functions for ridelog."""

from ridelog.utils.date_parser import parse_date, parse_datetime
from ridelog.utils.amount_parser import parse_amount
from ridelog.utils.identifier_resolver import resolve_platform, resolve_pickup_location

__all__ = [
    "parse_date",
    "parse_datetime",
    "parse_amount",
    "resolve_platform",
    "resolve_pickup_location",
]
