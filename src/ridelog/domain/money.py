"""Decimal helpers for money and distance values."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ridelog.domain.errors import ValidationError, negative_value, too_many_places

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def round_money(value: Decimal) -> Decimal:
    """Round a value half-up to two decimal places."""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def or_zero(value: Optional[Decimal]) -> Decimal:
    """Treat a missing optional amount as zero."""
    if value is None:
        return ZERO
    return Decimal(value)


def require_non_negative(field_name: str, value: Optional[Decimal]) -> None:
    """Raise ValidationError if an amount is present and negative."""
    if value is not None and Decimal(value) < 0:
        raise ValidationError(negative_value(field_name, value))


def require_max_places(field_name: str, value: Optional[Decimal], places: int) -> None:
    """Raise ValidationError if a value has more decimal places than storage keeps."""
    if value is None:
        return
    value = Decimal(value)
    if value != value.quantize(Decimal(1).scaleb(-places)):
        raise ValidationError(too_many_places(field_name, value, places))
