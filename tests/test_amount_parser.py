"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ridelog.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("25.50", Decimal("25.50")),
        ("AED 25.50", Decimal("25.50")),
        ("25.50 AED", Decimal("25.50")),
        ("Dhs 25", Decimal("25")),
        ("1,234.56", Decimal("1234.56")),
        ("  0 ", Decimal("0")),
    ],
)
def test_parse_amount_formats(text, expected):
    assert parse_amount(text) == expected


def test_parse_amount_rejects_negative():
    with pytest.raises(ValueError, match="negative"):
        parse_amount("-5")


def test_parse_amount_allows_negative_when_asked():
    assert parse_amount("-5", allow_negative=True) == Decimal("-5")


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)
