"""Budget allocation domain service."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from budgettrack.store.base import LedgerStore
from budgettrack.domain.category import SubCategoryService
from budgettrack.domain.entities import (
    BUDGET_TARGETS,
    BreakdownSlice,
    BudgetInsights,
    BudgetSummary,
    Category,
    TransactionType,
)
from budgettrack.domain.errors import ValidationError

SPENDING_CATEGORIES = (Category.ESSENTIAL, Category.WANTS, Category.INVESTMENT)


def _round_percent(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class BudgetService:
    """Service for income, savings and the 50/25/25 allocation."""

    def __init__(self, store: LedgerStore):
        """Initialize budget service.

        Args:
            store: Ledger store instance
        """
        self.store = store
        self.sub_category_service = SubCategoryService(store)

    def set_income(self, income: Decimal) -> None:
        """Set the monthly income figure.

        Raises:
            ValidationError: If income is negative
        """
        if income < 0:
            raise ValidationError("Income must not be negative")
        self.store.update(income=Decimal(income))

    def set_savings(self, savings: Decimal) -> None:
        """Set the amount put aside before budgeting.

        Raises:
            ValidationError: If savings is negative
        """
        if savings < 0:
            raise ValidationError("Savings must not be negative")
        self.store.update(savings=Decimal(savings))

    def summarize(self) -> BudgetSummary:
        """Compare spending per category with its share of net income.

        Net income is credited transactions plus the income figure, less
        savings. Only debits outside Income count as spending.
        """
        snapshot = self.store.snapshot()
        credits = sum(
            (t.amount for t in snapshot.transactions if t.type == TransactionType.CREDIT),
            Decimal("0"),
        )
        total_income = credits + snapshot.income
        net_income = max(Decimal("0"), total_income - snapshot.savings)

        totals = {category: Decimal("0") for category in SPENDING_CATEGORIES}
        for t in snapshot.transactions:
            if t.type == TransactionType.DEBIT and t.category in totals:
                totals[t.category] += t.amount

        targets = {
            category: net_income * share for category, share in BUDGET_TARGETS.items()
        }

        return BudgetSummary(
            total_income=total_income,
            net_income=net_income,
            totals=totals,
            targets=targets,
            total_spent=sum(totals.values(), Decimal("0")),
            insights=self._insights(totals, targets, total_income),
        )

    def _insights(
        self,
        totals: dict[Category, Decimal],
        targets: dict[Category, Decimal],
        total_income: Decimal,
    ) -> BudgetInsights:
        snapshot = self.store.snapshot()

        by_sub_category: dict[str, Decimal] = {}
        for t in snapshot.transactions:
            if t.type == TransactionType.DEBIT:
                by_sub_category[t.sub_category_id] = (
                    by_sub_category.get(t.sub_category_id, Decimal("0")) + t.amount
                )

        highest_id = ""
        highest_amount = Decimal("0")
        for sub_category_id, amount in by_sub_category.items():
            if amount > highest_amount:
                highest_id, highest_amount = sub_category_id, amount
        highest = self.sub_category_service.get_sub_category(highest_id)

        alerts = []
        essential_target = targets[Category.ESSENTIAL]
        if essential_target > 0 and totals[Category.ESSENTIAL] > essential_target:
            pct = _round_percent(
                (totals[Category.ESSENTIAL] - essential_target) / essential_target * 100
            )
            alerts.append(f"Essential spending is {pct}% over target.")
        wants_target = targets[Category.WANTS]
        if wants_target > 0 and totals[Category.WANTS] > wants_target:
            pct = _round_percent((totals[Category.WANTS] - wants_target) / wants_target * 100)
            alerts.append(f"'Wants' budget exceeded by {pct}%.")

        investment_rate = 0
        if total_income > 0:
            investment_rate = _round_percent(totals[Category.INVESTMENT] / total_income * 100)

        return BudgetInsights(
            highest_sub_category_name=highest.name if highest is not None else "None",
            highest_sub_category_amount=highest_amount,
            alerts=tuple(alerts),
            investment_rate=investment_rate,
        )

    def breakdown(self, category: Optional[Category] = None) -> list[BreakdownSlice]:
        """Split spending into slices.

        Args:
            category: None for one slice per spending category, or a category
                for one slice per sub-category of its debits

        Returns:
            Non-empty slices, largest first
        """
        if category is None:
            totals = self.summarize().totals
            return [
                BreakdownSlice(name=c.value, value=totals[c])
                for c in SPENDING_CATEGORIES
                if totals[c] > 0
            ]

        groups: dict[str, Decimal] = {}
        for t in self.store.snapshot().transactions:
            if t.category == category and t.type == TransactionType.DEBIT:
                name = self.sub_category_service.resolve_name(t.sub_category_id)
                groups[name] = groups.get(name, Decimal("0")) + t.amount

        slices = [BreakdownSlice(name=name, value=value) for name, value in groups.items()]
        return sorted(slices, key=lambda s: s.value, reverse=True)
