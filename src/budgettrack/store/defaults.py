"""Seed data for a fresh ledger."""

from budgettrack.domain.entities import (
    Category,
    LedgerSnapshot,
    SourceType,
    SpendingSource,
    SubCategory,
)

# (id, name, type, is_default)
INITIAL_SOURCES = [
    ("src-1", "Main Bank", SourceType.BANK, True),
    ("src-2", "Credit Card", SourceType.CARD, False),
    ("src-3", "Cash", SourceType.CASH, False),
    ("src-axis", "Axis", SourceType.BANK, False),
]

# (id, name, parent category)
INITIAL_SUB_CATEGORIES = [
    ("sub-1", "Rent", Category.ESSENTIAL),
    ("sub-2", "Electricity", Category.ESSENTIAL),
    ("sub-3", "Grocery", Category.ESSENTIAL),
    ("sub-4", "Mutual Fund", Category.INVESTMENT),
    ("sub-5", "Stocks", Category.INVESTMENT),
    ("sub-6", "RD", Category.INVESTMENT),
    ("sub-7", "Outside Food", Category.WANTS),
    ("sub-8", "Entertainment", Category.WANTS),
    ("sub-9", "OTT", Category.ESSENTIAL),
    ("sub-10", "Credit Card Bill", Category.ESSENTIAL),
    ("sub-11", "Car EMI", Category.ESSENTIAL),
    ("sub-12", "Gold ETF", Category.INVESTMENT),
    ("sub-13", "Credit Card EMI", Category.WANTS),
    ("sub-inc-1", "Salary", Category.INCOME),
    ("sub-inc-2", "Refund", Category.INCOME),
    ("sub-inc-3", "Interest", Category.INCOME),
    ("sub-shopping", "shopping", Category.WANTS),
    ("sub-movie", "movie", Category.WANTS),
    ("sub-cab", "cab", Category.WANTS),
    ("sub-saving", "saving", Category.INVESTMENT),
    ("sub-misc", "miscellenous", Category.WANTS),
    ("sub-family", "family", Category.ESSENTIAL),
    ("sub-bike", "bike", Category.ESSENTIAL),
    ("sub-house", "house", Category.ESSENTIAL),
    ("sub-mobile", "mobile", Category.ESSENTIAL),
    ("sub-travel", "travel", Category.WANTS),
    ("sub-saloon", "saloon", Category.ESSENTIAL),
]


def default_snapshot() -> LedgerSnapshot:
    """Return the starting ledger: seeded sources and sub-categories, no transactions."""
    return LedgerSnapshot(
        sources=tuple(
            SpendingSource(id=id_, name=name, type=type_, is_default=is_default)
            for id_, name, type_, is_default in INITIAL_SOURCES
        ),
        sub_categories=tuple(
            SubCategory(id=id_, name=name, parent_id=parent)
            for id_, name, parent in INITIAL_SUB_CATEGORIES
        ),
    )
