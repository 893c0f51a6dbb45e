"""Shared pytest fixtures for budgettrack tests."""

import itertools
from pathlib import Path

import pytest

from budgettrack.store.defaults import default_snapshot
from budgettrack.store.factories import create_ledger_store
from budgettrack.store.memory import InMemoryLedgerStore
from budgettrack.domain.budget import BudgetService
from budgettrack.domain.category import SubCategoryService
from budgettrack.domain.review import ImportReview
from budgettrack.domain.source import SourceService
from budgettrack.domain.transaction import TransactionService


@pytest.fixture
def store():
    """Create an in-memory store seeded with default sources and sub-categories."""
    store = InMemoryLedgerStore(default_snapshot())
    store.connect()
    yield store
    store.disconnect()


@pytest.fixture
def empty_store():
    """Create an in-memory store with no data at all."""
    return InMemoryLedgerStore()


@pytest.fixture
def source_service(store):
    """Create a SourceService over the seeded store."""
    return SourceService(store)


@pytest.fixture
def sub_category_service(store):
    """Create a SubCategoryService over the seeded store."""
    return SubCategoryService(store)


@pytest.fixture
def transaction_service(store):
    """Create a TransactionService over the seeded store."""
    return TransactionService(store)


@pytest.fixture
def budget_service(store):
    """Create a BudgetService over the seeded store."""
    return BudgetService(store)


@pytest.fixture
def id_factory():
    """Produce predictable IDs: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def review(store, id_factory):
    """Create an ImportReview with predictable IDs."""
    return ImportReview(store, id_factory=id_factory)


@pytest.fixture
def ledger_path(tmp_path):
    """Return a path for a ledger file that does not exist yet."""
    return str(tmp_path / "ledger.json")


@pytest.fixture
def file_store(ledger_path):
    """Create a connected file backed store."""
    store = create_ledger_store(ledger_path=ledger_path)
    store.connect()
    return store


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
