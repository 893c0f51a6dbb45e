"""Staging and review workflow for statement imports."""

import logging
import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from budgettrack.store.base import LedgerStore
from budgettrack.domain.category import SubCategoryService, parse_category
from budgettrack.domain.entities import (
    PendingTransaction,
    SubCategory,
    Transaction,
)
from budgettrack.domain.errors import (
    NotFoundError,
    ValidationError,
    pending_item_not_found,
)
from budgettrack.domain.source import SourceService
from budgettrack.domain.statement_import import default_category_for_type, parse_statement
from budgettrack.domain.transaction import (
    TransactionService,
    parse_transaction_type,
    validate_amount,
)
from budgettrack.utils.amount_parser import parse_amount
from budgettrack.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "date",
    "name",
    "amount",
    "type",
    "category",
    "sub_category_id",
    "source_id",
    "is_selected",
)


class ReviewState(str, Enum):
    """Import workflow state."""

    INPUT = "input"
    REVIEW = "review"


def _new_id() -> str:
    return str(uuid.uuid4())


class ImportReview:
    """Holds parsed statement candidates until the user confirms them.

    The workflow starts in ``INPUT``. ``start_review`` parses pasted text into
    a pending list and moves to ``REVIEW``, where items can be edited,
    (de)selected and finally committed to the ledger with ``confirm``.
    Pending items live only in this object and are never written to the store.
    """

    def __init__(self, store: LedgerStore, id_factory: Optional[Callable[[], str]] = None):
        """Initialize import review.

        Args:
            store: Ledger store receiving confirmed transactions
            id_factory: Produces identities for pending and confirmed items
        """
        self.store = store
        self.sub_category_service = SubCategoryService(store)
        self.source_service = SourceService(store)
        self.transaction_service = TransactionService(store)
        self.id_factory = id_factory or _new_id
        self.state = ReviewState.INPUT
        self.raw_text = ""
        self.pending: tuple[PendingTransaction, ...] = ()

    def start_review(self, text: str) -> tuple[PendingTransaction, ...]:
        """Parse statement text into the pending list.

        Raises:
            NoDatesFound: If the text contains no dates
            NoUsableCandidates: If no block yielded a transaction
        """
        snapshot = self.store.snapshot()
        # Parse first so a failure leaves the workflow untouched
        pending = parse_statement(
            text,
            snapshot.sub_categories,
            source_id=self.source_service.default_source_id(),
            id_factory=self.id_factory,
        )
        self.raw_text = text
        self.pending = pending
        self.state = ReviewState.REVIEW
        logger.info("Staged %d transactions for review", len(pending))
        return pending

    def _require_review(self) -> None:
        if self.state != ReviewState.REVIEW:
            raise ValidationError("No statement is being reviewed")

    def get_item(self, item_id: str) -> PendingTransaction:
        """Return a pending item.

        Raises:
            NotFoundError: If no pending item has this ID
        """
        for item in self.pending:
            if item.id == item_id:
                return item
        raise NotFoundError(pending_item_not_found(item_id))

    def _replace_item(self, updated: PendingTransaction) -> PendingTransaction:
        self.pending = tuple(updated if p.id == updated.id else p for p in self.pending)
        return updated

    def update_item(self, item_id: str, field: str, value: Any) -> PendingTransaction:
        """Change one field of a pending item.

        Switching ``type`` resets the category and sub-category to the default
        for the new direction. Switching ``category`` resets the sub-category
        to the first one under the new category.

        Args:
            item_id: Pending item ID
            field: One of EDITABLE_FIELDS
            value: New value; strings are parsed for typed fields

        Raises:
            ValidationError: If the field is unknown or the value invalid
            NotFoundError: If the item doesn't exist
        """
        self._require_review()
        item = self.get_item(item_id)
        sub_categories = self.store.snapshot().sub_categories

        if field == "type":
            txn_type = parse_transaction_type(value)
            guess = default_category_for_type(txn_type, sub_categories)
            changes = {
                "type": txn_type,
                "category": guess.category,
                "sub_category_id": guess.sub_category_id,
            }
        elif field == "category":
            category = parse_category(value)
            first = self.sub_category_service.first_sub_category(category)
            changes = {
                "category": category,
                "sub_category_id": first.id if first is not None else "",
            }
        elif field == "amount":
            changes = {"amount": self._coerce_amount(value)}
        elif field == "date":
            changes = {"date": self._coerce_date(value)}
        elif field == "name":
            name = str(value).strip()
            if not name:
                raise ValidationError("Transaction name must not be empty")
            changes = {"name": name}
        elif field == "sub_category_id":
            changes = {"sub_category_id": str(value)}
        elif field == "source_id":
            changes = {"source_id": self.source_service.require_source(str(value)).id}
        elif field == "is_selected":
            changes = {"is_selected": bool(value)}
        else:
            raise ValidationError(
                f"Unknown field '{field}'. Editable fields: {', '.join(EDITABLE_FIELDS)}"
            )

        return self._replace_item(replace(item, **changes))

    @staticmethod
    def _coerce_amount(value: Any) -> Decimal:
        if isinstance(value, str):
            try:
                return parse_amount(value)
            except ValueError as e:
                raise ValidationError(str(e))
        return validate_amount(value)

    @staticmethod
    def _coerce_date(value: Any) -> date:
        if isinstance(value, date):
            return value
        try:
            return parse_date(str(value))
        except ValueError as e:
            raise ValidationError(str(e))

    def toggle_select(self, item_id: str, selected: bool) -> PendingTransaction:
        """Select or deselect one pending item."""
        self._require_review()
        return self._replace_item(replace(self.get_item(item_id), is_selected=selected))

    def select_all(self, selected: bool) -> None:
        """Select or deselect every pending item."""
        self._require_review()
        self.pending = tuple(replace(p, is_selected=selected) for p in self.pending)

    def clear(self) -> None:
        """Drop every pending item, staying in review."""
        self._require_review()
        self.pending = ()

    def add_sub_category(self, item_id: str, name: str) -> SubCategory:
        """Create a sub-category under an item's category and assign it.

        Raises:
            ValidationError: If name is blank
            NotFoundError: If the item doesn't exist
        """
        self._require_review()
        item = self.get_item(item_id)
        sub_category = self.sub_category_service.create_sub_category(name, item.category)
        self._replace_item(replace(item, sub_category_id=sub_category.id))
        return sub_category

    def selected_items(self) -> tuple[PendingTransaction, ...]:
        """Return the pending items that would be imported."""
        return tuple(p for p in self.pending if p.is_selected)

    def confirm(self) -> tuple[Transaction, ...]:
        """Commit selected items to the ledger and return to input.

        Unselected items are discarded.

        Returns:
            The appended transactions
        """
        self._require_review()
        batch = tuple(p.to_transaction(self.id_factory()) for p in self.selected_items())
        appended = self.transaction_service.append_transactions(batch)
        logger.info(
            "Imported %d of %d reviewed transactions", len(appended), len(self.pending)
        )
        self._reset()
        return appended

    def cancel(self) -> None:
        """Discard the pending list and return to input."""
        self._reset()

    def _reset(self) -> None:
        self.pending = ()
        self.raw_text = ""
        self.state = ReviewState.INPUT
