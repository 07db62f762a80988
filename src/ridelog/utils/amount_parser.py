"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY = re.compile(r"(?i)\b(aed|dhs?)\b|[$€£¥]|د\.إ")


def parse_amount(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "25.50"
    - "AED 25.50", "25.50 AED", "Dhs 25"
    - "1,234.56"

    Fares, fees and distances are never negative, so a negative value is an
    error unless allow_negative is set.

    Args:
        amount_str: Amount string
        allow_negative: Accept values below zero

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY.sub("", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0 and not allow_negative:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount
