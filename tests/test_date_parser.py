"""Tests for date parser with relative and day-first dates."""

import pytest
from datetime import date, timedelta

from budgettrack.utils.date_parser import parse_date, parse_statement_date


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    result = parse_date("2025-11-28")
    assert result == date(2025, 11, 28)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("Yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_day_first():
    """Test that ambiguous dates are read day first."""
    assert parse_date("01-12-2025") == date(2025, 12, 1)
    assert parse_date("01/12/2025") == date(2025, 12, 1)


def test_parse_month_name():
    """Test parsing dates with month names."""
    assert parse_date("28 Nov 2025") == date(2025, 11, 28)


def test_parse_invalid_date():
    """Test parsing invalid date raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_statement_date():
    """Test parsing statement date anchors."""
    assert parse_statement_date("28-11-2025") == date(2025, 11, 28)
    assert parse_statement_date("05/01/2026") == date(2026, 1, 5)


def test_parse_statement_date_impossible():
    """Test that impossible calendar dates are rejected."""
    with pytest.raises(ValueError):
        parse_statement_date("31-02-2025")
    with pytest.raises(ValueError):
        parse_statement_date("01-13-2025")
