"""Domain model entities for budgettrack.

These are pure data classes representing budgeting concepts, independent of
how the ledger is stored or exchanged. Mutation always produces a new value
(``dataclasses.replace``) so that store snapshots stay immutable.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum


class Category(str, Enum):
    """Fixed top-level budget bucket."""

    ESSENTIAL = "Essential"
    WANTS = "Wants"
    INVESTMENT = "Investment"
    INCOME = "Income"


class SourceType(str, Enum):
    """Kind of spending source."""

    BANK = "Bank"
    CARD = "Card"
    CASH = "Cash"


class TransactionType(str, Enum):
    """Direction of money movement."""

    DEBIT = "debit"
    CREDIT = "credit"


# Share of net income targeted for each spending bucket.
BUDGET_TARGETS = {
    Category.ESSENTIAL: Decimal("0.50"),
    Category.WANTS: Decimal("0.25"),
    Category.INVESTMENT: Decimal("0.25"),
}


@dataclass(frozen=True)
class SpendingSource:
    """Bank account, card or cash pool a transaction is attributed to."""

    id: str
    name: str
    type: SourceType
    is_default: bool = False


@dataclass(frozen=True)
class SubCategory:
    """User-defined label nested under exactly one category."""

    id: str
    name: str
    parent_id: Category


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity."""

    id: str
    date: date
    name: str
    amount: Decimal
    type: TransactionType
    category: Category
    sub_category_id: str
    source_id: str


@dataclass(frozen=True)
class PendingTransaction:
    """Staged import candidate awaiting review."""

    id: str
    date: date
    name: str
    amount: Decimal
    type: TransactionType
    category: Category
    sub_category_id: str
    source_id: str
    original_description: str = ""
    is_selected: bool = True

    def to_transaction(self, new_id: str) -> Transaction:
        """Promote to a ledger transaction with a fresh identity."""
        return Transaction(
            id=new_id,
            date=self.date,
            name=self.name,
            amount=self.amount,
            type=self.type,
            category=self.category,
            sub_category_id=self.sub_category_id,
            source_id=self.source_id,
        )


@dataclass(frozen=True)
class StatementFields:
    """Fields extracted from one statement block."""

    date: date
    amount: Decimal
    type: TransactionType
    name: str
    original_description: str


@dataclass(frozen=True)
class CategoryGuess:
    """Best-guess category assignment for an imported candidate."""

    category: Category
    sub_category_id: str


@dataclass(frozen=True)
class LedgerSnapshot:
    """Immutable view of every collection held by the ledger store."""

    income: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")
    sources: tuple[SpendingSource, ...] = ()
    sub_categories: tuple[SubCategory, ...] = ()
    transactions: tuple[Transaction, ...] = ()

    def with_changes(self, **changes) -> "LedgerSnapshot":
        """Return a copy with the given fields replaced."""
        for name in ("sources", "sub_categories", "transactions"):
            if name in changes:
                changes[name] = tuple(changes[name])
        return replace(self, **changes)


@dataclass(frozen=True)
class BreakdownSlice:
    """One slice of a spending breakdown."""

    name: str
    value: Decimal


@dataclass(frozen=True)
class BudgetInsights:
    """Derived observations about spending."""

    highest_sub_category_name: str
    highest_sub_category_amount: Decimal
    alerts: tuple[str, ...]
    investment_rate: int


@dataclass(frozen=True)
class BudgetSummary:
    """Spending against the fixed allocation targets."""

    total_income: Decimal
    net_income: Decimal
    totals: dict[Category, Decimal]
    targets: dict[Category, Decimal]
    total_spent: Decimal
    insights: BudgetInsights
