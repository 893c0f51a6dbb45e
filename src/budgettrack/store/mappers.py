"""Mapper functions to convert between domain entities and exchange records.

Exchange records are the plain dicts written to and read from the JSON ledger
file. Field names follow the file format (camelCase); dates are ISO strings.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from budgettrack.domain import entities as domain


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number to Decimal.

    Raises:
        TypeError: If value is not a number
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _require_str(record: dict, key: str) -> str:
    value = record[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _optional_str(record: dict, key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def source_to_record(source: domain.SpendingSource) -> dict[str, Any]:
    """Convert SpendingSource entity to an exchange record."""
    return {
        "id": source.id,
        "name": source.name,
        "type": source.type.value,
        "isDefault": source.is_default,
    }


def source_from_record(record: dict[str, Any]) -> domain.SpendingSource:
    """Convert an exchange record to a SpendingSource entity."""
    return domain.SpendingSource(
        id=_require_str(record, "id"),
        name=_require_str(record, "name"),
        type=domain.SourceType(record["type"]),
        is_default=bool(record.get("isDefault", False)),
    )


def sub_category_to_record(sub_category: domain.SubCategory) -> dict[str, Any]:
    """Convert SubCategory entity to an exchange record."""
    return {
        "id": sub_category.id,
        "name": sub_category.name,
        "parentId": sub_category.parent_id.value,
    }


def sub_category_from_record(record: dict[str, Any]) -> domain.SubCategory:
    """Convert an exchange record to a SubCategory entity."""
    return domain.SubCategory(
        id=_require_str(record, "id"),
        name=_require_str(record, "name"),
        parent_id=domain.Category(record["parentId"]),
    )


def transaction_to_record(transaction: domain.Transaction) -> dict[str, Any]:
    """Convert Transaction entity to an exchange record."""
    return {
        "id": transaction.id,
        "date": transaction.date.isoformat(),
        "name": transaction.name,
        "amount": transaction.amount,
        "type": transaction.type.value,
        "category": transaction.category.value,
        "subCategoryId": transaction.sub_category_id,
        "sourceId": transaction.source_id,
    }


def transaction_from_record(record: dict[str, Any]) -> domain.Transaction:
    """Convert an exchange record to a Transaction entity."""
    amount = to_decimal(record["amount"])
    if not amount.is_finite() or amount < 0:
        raise ValueError("'amount' must not be negative")
    return domain.Transaction(
        id=_require_str(record, "id"),
        date=date.fromisoformat(_require_str(record, "date")),
        name=_require_str(record, "name"),
        amount=amount,
        type=domain.TransactionType(record["type"]),
        category=domain.Category(record["category"]),
        sub_category_id=_optional_str(record, "subCategoryId"),
        source_id=_optional_str(record, "sourceId"),
    )
