"""Utility functions for budgettrack."""

from budgettrack.utils.date_parser import parse_date, parse_statement_date
from budgettrack.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_statement_date", "parse_amount"]
