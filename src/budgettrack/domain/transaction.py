"""Transaction domain service."""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from budgettrack.store.base import LedgerStore
from budgettrack.domain.category import SubCategoryService, parse_category
from budgettrack.domain.entities import Category, Transaction, TransactionType
from budgettrack.domain.errors import (
    NotFoundError,
    ValidationError,
    transaction_not_found,
)
from budgettrack.domain.source import SourceService


def parse_transaction_type(value: TransactionType | str) -> TransactionType:
    """Parse a debit/credit tag, accepting any letter case.

    Raises:
        ValidationError: If value is neither debit nor credit
    """
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown transaction type '{value}'. Choose debit or credit")


def validate_amount(amount: Decimal) -> Decimal:
    """Check that an amount is a finite, non-negative Decimal."""
    amount = Decimal(amount)
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"Amount must be a non-negative number, got {amount}")
    return amount


class TransactionService:
    """Service for managing ledger transactions."""

    def __init__(self, store: LedgerStore):
        """Initialize transaction service.

        Args:
            store: Ledger store instance
        """
        self.store = store
        self.sub_category_service = SubCategoryService(store)
        self.source_service = SourceService(store)

    def create_transaction(
        self,
        name: str,
        amount: Decimal,
        date: date,
        type: TransactionType | str = TransactionType.DEBIT,
        category: Category | str = Category.ESSENTIAL,
        sub_category_id: Optional[str] = None,
        source_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction from manual entry.

        Args:
            name: Description
            amount: Non-negative amount
            date: Transaction date
            type: debit or credit
            category: Budget category
            sub_category_id: Optional sub-category (defaults to the first under category)
            source_id: Optional source (defaults to the default source)

        Returns:
            The created transaction

        Raises:
            ValidationError: If name is blank or amount is negative
            NotFoundError: If the source doesn't exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Transaction name must not be empty")

        category = parse_category(category)
        if sub_category_id is None:
            first = self.sub_category_service.first_sub_category(category)
            sub_category_id = first.id if first is not None else ""

        if source_id is None:
            source_id = self.source_service.default_source_id()
        else:
            self.source_service.require_source(source_id)

        transaction = Transaction(
            id=str(uuid.uuid4()),
            date=date,
            name=name,
            amount=validate_amount(amount),
            type=parse_transaction_type(type),
            category=category,
            sub_category_id=sub_category_id,
            source_id=source_id,
        )
        self.append_transactions([transaction])
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, or None if not found."""
        for transaction in self.store.snapshot().transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        transaction = self.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def update_transaction(
        self,
        transaction_id: str,
        name: Optional[str] = None,
        amount: Optional[Decimal] = None,
        date: Optional[date] = None,
        type: Optional[TransactionType | str] = None,
        category: Optional[Category | str] = None,
        sub_category_id: Optional[str] = None,
        source_id: Optional[str] = None,
    ) -> Transaction:
        """Update transaction fields.

        Only the fields that are provided change. Changing the category without
        a sub-category moves the transaction to the first sub-category under
        the new category.

        Raises:
            NotFoundError: If transaction or source doesn't exist
            ValidationError: If a field value is invalid
        """
        transaction = self.require_transaction(transaction_id)
        changes = {}

        if name is not None:
            if not name.strip():
                raise ValidationError("Transaction name must not be empty")
            changes["name"] = name.strip()
        if amount is not None:
            changes["amount"] = validate_amount(amount)
        if date is not None:
            changes["date"] = date
        if type is not None:
            changes["type"] = parse_transaction_type(type)
        if category is not None:
            new_category = parse_category(category)
            changes["category"] = new_category
            if sub_category_id is None and new_category != transaction.category:
                first = self.sub_category_service.first_sub_category(new_category)
                changes["sub_category_id"] = first.id if first is not None else ""
        if sub_category_id is not None:
            changes["sub_category_id"] = sub_category_id
        if source_id is not None:
            self.source_service.require_source(source_id)
            changes["source_id"] = source_id

        updated = replace(transaction, **changes)
        transactions = tuple(
            updated if t.id == transaction_id else t
            for t in self.store.snapshot().transactions
        )
        self.store.update(transactions=transactions)
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        transactions = tuple(
            t for t in self.store.snapshot().transactions if t.id != transaction_id
        )
        self.store.update(transactions=transactions)

    def list_transactions(
        self,
        category: Optional[Category] = None,
        type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date, then by insertion.

        Args:
            category: Optional category filter
            type: Optional debit/credit filter
        """
        transactions = [
            t
            for t in self.store.snapshot().transactions
            if (category is None or t.category == category)
            and (type is None or t.type == type)
        ]
        # sorted() is stable, so same-day transactions keep insertion order
        return sorted(transactions, key=lambda t: t.date)

    def append_transactions(self, batch: Iterable[Transaction]) -> tuple[Transaction, ...]:
        """Append a batch of transactions in a single commit.

        Raises:
            ValidationError: If a batch ID collides with an existing transaction
        """
        batch = tuple(batch)
        existing = {t.id for t in self.store.snapshot().transactions}
        for transaction in batch:
            if transaction.id in existing:
                raise ValidationError(
                    f"Transaction with id '{transaction.id}' already exists"
                )
            existing.add(transaction.id)

        self.store.update(transactions=self.store.snapshot().transactions + batch)
        return batch

    def reset_transactions(self) -> int:
        """Delete every transaction, keeping sources and sub-categories.

        Returns:
            Number of transactions removed
        """
        count = len(self.store.snapshot().transactions)
        self.store.update(transactions=())
        return count
