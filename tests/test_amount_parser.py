"""Tests for amount parser."""

import pytest
from decimal import Decimal

from budgettrack.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("1,23,456.00", Decimal("123456.00")),
        ("₹479.05", Decimal("479.05")),
        ("Rs. 1,200", Decimal("1200")),
        ("INR 50", Decimal("50")),
        ("  85000  ", Decimal("85000")),
    ],
)
def test_parse_amount(text, expected):
    """Test parsing amounts in various formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "lots", "12.3.4", "NaN", "Infinity"])
def test_parse_invalid_amount(text):
    """Test that unparseable amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_negative_amount():
    """Test that negative amounts are rejected."""
    with pytest.raises(ValueError, match="negative"):
        parse_amount("-5.00")
