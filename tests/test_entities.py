"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from budgettrack.domain.entities import (
    BUDGET_TARGETS,
    Category,
    LedgerSnapshot,
    PendingTransaction,
    SourceType,
    SpendingSource,
    SubCategory,
    Transaction,
    TransactionType,
)


class TestSpendingSource:
    """Tests for SpendingSource entity."""

    def test_create_source(self):
        """Test creating a SpendingSource entity."""
        source = SpendingSource(id="src-1", name="Main Bank", type=SourceType.BANK)
        assert source.name == "Main Bank"
        assert source.type == SourceType.BANK
        assert source.is_default is False

    def test_source_immutability(self):
        """Test that SpendingSource entities are immutable."""
        source = SpendingSource(id="src-1", name="Main Bank", type=SourceType.BANK)
        with pytest.raises(FrozenInstanceError):
            source.name = "Other"


class TestSubCategory:
    """Tests for SubCategory entity."""

    def test_create_sub_category(self):
        """Test creating a SubCategory entity."""
        sub = SubCategory(id="sub-1", name="Rent", parent_id=Category.ESSENTIAL)
        assert sub.parent_id == Category.ESSENTIAL
        assert sub.parent_id.value == "Essential"


class TestTransaction:
    """Tests for Transaction and PendingTransaction entities."""

    def test_create_transaction(self):
        """Test creating a Transaction entity."""
        txn = Transaction(
            id="t-1",
            date=date(2025, 11, 28),
            name="AMAZON",
            amount=Decimal("479.05"),
            type=TransactionType.DEBIT,
            category=Category.ESSENTIAL,
            sub_category_id="sub-1",
            source_id="src-1",
        )
        assert txn.amount == Decimal("479.05")
        assert txn.type.value == "debit"

    def test_pending_to_transaction(self):
        """Test promoting a pending item drops review-only fields."""
        pending = PendingTransaction(
            id="p-1",
            date=date(2025, 11, 28),
            name="AMAZON",
            amount=Decimal("479.05"),
            type=TransactionType.DEBIT,
            category=Category.ESSENTIAL,
            sub_category_id="sub-1",
            source_id="src-1",
            original_description="28-11-2025 UPI/P2M/AMAZON 479.05...",
        )
        txn = pending.to_transaction("t-9")

        assert isinstance(txn, Transaction)
        assert txn.id == "t-9"
        assert txn.name == pending.name
        assert txn.amount == pending.amount
        assert not hasattr(txn, "is_selected")


class TestLedgerSnapshot:
    """Tests for LedgerSnapshot."""

    def test_empty_snapshot(self):
        """Test the defaults of an empty ledger."""
        snapshot = LedgerSnapshot()
        assert snapshot.income == Decimal("0")
        assert snapshot.transactions == ()

    def test_with_changes_copies(self):
        """Test that with_changes leaves the original untouched."""
        snapshot = LedgerSnapshot()
        source = SpendingSource(id="a", name="A", type=SourceType.CASH)
        changed = snapshot.with_changes(sources=[source], income=Decimal("10"))

        assert changed.sources == (source,)
        assert isinstance(changed.sources, tuple)
        assert changed.income == Decimal("10")
        assert snapshot.sources == ()


def test_budget_targets_sum_to_one():
    """Test the fixed allocation shares."""
    assert BUDGET_TARGETS[Category.ESSENTIAL] == Decimal("0.50")
    assert sum(BUDGET_TARGETS.values()) == Decimal("1")
    assert Category.INCOME not in BUDGET_TARGETS
