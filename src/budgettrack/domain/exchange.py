"""JSON export and import of the whole ledger."""

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from budgettrack.store.base import LedgerStore
from budgettrack.store.mappers import (
    source_from_record,
    source_to_record,
    sub_category_from_record,
    sub_category_to_record,
    to_decimal,
    transaction_from_record,
    transaction_to_record,
)
from budgettrack.domain.entities import LedgerSnapshot
from budgettrack.domain.errors import (
    InvalidFieldShape,
    MalformedImportFile,
    invalid_field_shape,
    malformed_import_file,
)
from budgettrack.domain.source import normalize_default_flag

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of applying a ledger file."""

    applied: list[str] = field(default_factory=list)
    skipped: list[InvalidFieldShape] = field(default_factory=list)


def export_ledger(snapshot: LedgerSnapshot) -> dict[str, Any]:
    """Convert a snapshot to the exchange document."""
    return {
        "income": snapshot.income,
        "savings": snapshot.savings,
        "sources": [source_to_record(s) for s in snapshot.sources],
        "subCategories": [sub_category_to_record(s) for s in snapshot.sub_categories],
        "transactions": [transaction_to_record(t) for t in snapshot.transactions],
    }


def _decimal_text(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return str(value)


def dumps_ledger(snapshot: LedgerSnapshot) -> str:
    """Serialize a snapshot as indented JSON.

    Amounts are written with every digit of their Decimal value. The json
    module only knows floats, so each Decimal is first written as a quoted
    placeholder and the placeholder is then swapped for the number text.
    """
    marker = uuid.uuid4().hex
    numbers: list[str] = []

    def encode_decimal(value: Any) -> Any:
        if isinstance(value, Decimal):
            numbers.append(_decimal_text(value))
            return f"{marker}{len(numbers) - 1}"
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    text = json.dumps(
        export_ledger(snapshot), indent=2, ensure_ascii=False, default=encode_decimal
    )
    return re.sub(f'"{marker}(\\d+)"', lambda m: numbers[int(m.group(1))], text)


def default_export_filename(today: date) -> str:
    """Return the suggested export filename for a day."""
    return f"budget_tracker_{today.strftime('%d-%m-%Y')}.json"


def _parse_number(value: Any) -> Decimal:
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError("number must be finite")
    return amount


def _parse_records(parse: Callable[[dict], Any]) -> Callable[[Any], tuple]:
    def parse_all(value: Any) -> tuple:
        if not isinstance(value, list):
            raise TypeError("not an array")
        records = []
        for record in value:
            if not isinstance(record, dict):
                raise TypeError("array items must be objects")
            records.append(parse(record))
        return tuple(records)

    return parse_all


def _parse_sources(value: Any) -> tuple:
    sources = _parse_records(source_from_record)(value)
    if not sources:
        raise ValueError("at least one source is required")
    return normalize_default_flag(sources)


# file key -> (snapshot field, parser, expected shape)
FIELD_PARSERS = [
    ("income", "income", _parse_number, "a number"),
    ("savings", "savings", _parse_number, "a number"),
    ("sources", "sources", _parse_sources, "a non-empty array of sources"),
    (
        "subCategories",
        "sub_categories",
        _parse_records(sub_category_from_record),
        "an array of sub-categories",
    ),
    (
        "transactions",
        "transactions",
        _parse_records(transaction_from_record),
        "an array of transactions",
    ),
]


def loads_ledger(text: str | bytes) -> dict[str, Any]:
    """Parse an exchange document.

    Args:
        text: Document text, or raw file bytes that must be UTF-8

    Raises:
        MalformedImportFile: If text is not UTF-8 or not a JSON object
    """
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        document = json.loads(text, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedImportFile(malformed_import_file(str(e)))
    if not isinstance(document, dict):
        raise MalformedImportFile(malformed_import_file("top level is not an object"))
    return document


def apply_document(snapshot: LedgerSnapshot, document: dict[str, Any]) -> tuple[LedgerSnapshot, ImportResult]:
    """Merge an exchange document into a snapshot field by field.

    Fields that are absent keep their current value. Fields that are present
    but malformed are skipped and reported.
    """
    result = ImportResult()
    changes = {}
    for key, attribute, parse, expected in FIELD_PARSERS:
        if key not in document:
            continue
        try:
            changes[attribute] = parse(document[key])
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            logger.debug("Skipping field %s: %s", key, e)
            result.skipped.append(InvalidFieldShape(invalid_field_shape(key, expected)))
            continue
        result.applied.append(key)

    return snapshot.with_changes(**changes), result


def import_ledger(store: LedgerStore, text: str | bytes) -> ImportResult:
    """Apply a ledger file to the store in a single commit.

    Raises:
        MalformedImportFile: If text is not a UTF-8 JSON object; nothing is changed
    """
    document = loads_ledger(text)
    snapshot, result = apply_document(store.snapshot(), document)
    if result.applied:
        store.commit(snapshot)
    logger.info(
        "Ledger import applied %s, skipped %d field(s)",
        ", ".join(result.applied) or "nothing",
        len(result.skipped),
    )
    return result
