"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class NoDatesFound(DomainError):
    """Pasted statement text contains no date anchors."""


class NoUsableCandidates(DomainError):
    """Statement blocks were found but none yielded a transaction."""


class MalformedImportFile(DomainError):
    """Ledger file could not be parsed as JSON."""


class InvalidFieldShape(DomainError):
    """A ledger file field is present but has the wrong shape."""


def source_not_found(source_id: str) -> str:
    """Return message for missing spending source."""
    return f"Source '{source_id}' not found"


def sub_category_not_found(sub_category_id: str) -> str:
    """Return message for missing sub-category."""
    return f"Sub-category '{sub_category_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def pending_item_not_found(item_id: str) -> str:
    """Return message for missing pending import item."""
    return f"Pending item '{item_id}' not found"


def no_dates_found() -> str:
    """Return message when statement text has no date anchors."""
    return (
        "No dates found. Please ensure you pasted the statement text "
        "including dates like 28-11-2025."
    )


def no_usable_candidates(block_count: int) -> str:
    """Return message when no block produced a transaction."""
    return (
        f"Found {block_count} block{'s' if block_count != 1 else ''} but none "
        "contained an amount like 1,234.56."
    )


def malformed_import_file(reason: str) -> str:
    """Return message for an unparseable ledger file."""
    return f"Import failed: file is not valid JSON ({reason})"


def invalid_field_shape(field_name: str, expected: str) -> str:
    """Return message for a ledger field with the wrong shape."""
    return f"Field '{field_name}' skipped: expected {expected}"
