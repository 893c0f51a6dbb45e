"""Tests for ledger export and import."""

import json
from datetime import date
from decimal import Decimal

import pytest

from budgettrack.domain.entities import Category, TransactionType
from budgettrack.domain.errors import InvalidFieldShape, MalformedImportFile
from budgettrack.domain.exchange import (
    default_export_filename,
    dumps_ledger,
    export_ledger,
    import_ledger,
    loads_ledger,
)


@pytest.fixture
def populated_store(store, transaction_service, budget_service):
    budget_service.set_income(Decimal("50000"))
    budget_service.set_savings(Decimal("5000"))
    transaction_service.create_transaction("Rent", Decimal("19000"), date(2025, 11, 1))
    transaction_service.create_transaction(
        "Pizza", Decimal("479.05"), date(2025, 11, 2), category=Category.WANTS
    )
    transaction_service.create_transaction(
        "Salary", Decimal("10000"), date(2025, 11, 3), type="credit", category="Income"
    )
    return store


def test_export_document_keys(populated_store):
    document = export_ledger(populated_store.snapshot())
    assert set(document) == {"income", "savings", "sources", "subCategories", "transactions"}
    assert document["transactions"][0]["date"] == "2025-11-01"
    assert document["transactions"][2]["type"] == "credit"
    assert document["sources"][0] == {
        "id": "src-1",
        "name": "Main Bank",
        "type": "Bank",
        "isDefault": True,
    }


def test_dumps_writes_plain_numbers(populated_store):
    document = json.loads(dumps_ledger(populated_store.snapshot()))
    assert document["income"] == 50000
    assert document["transactions"][1]["amount"] == 479.05


def test_round_trip(populated_store, empty_store):
    original = populated_store.snapshot()
    result = import_ledger(empty_store, dumps_ledger(original))
    restored = empty_store.snapshot()

    assert result.skipped == []
    assert restored.income == original.income
    assert restored.savings == original.savings
    assert restored.sources == original.sources
    assert restored.sub_categories == original.sub_categories
    assert restored.transactions == original.transactions


def test_partial_import_keeps_other_fields(populated_store):
    before = populated_store.snapshot()
    text = json.dumps(
        {
            "transactions": [
                {
                    "id": "t-new",
                    "date": "2025-12-01",
                    "name": "Bonus",
                    "amount": 2500,
                    "type": "credit",
                    "category": "Income",
                    "subCategoryId": "sub-inc-1",
                    "sourceId": "src-1",
                }
            ]
        }
    )

    result = import_ledger(populated_store, text)
    after = populated_store.snapshot()

    assert result.applied == ["transactions"]
    assert [t.id for t in after.transactions] == ["t-new"]
    assert after.transactions[0].type == TransactionType.CREDIT
    assert after.income == before.income
    assert after.savings == before.savings
    assert after.sources == before.sources
    assert after.sub_categories == before.sub_categories


@pytest.mark.parametrize("text", ["{not json", "[1, 2, 3]", '"ledger"'])
def test_malformed_file_changes_nothing(populated_store, text):
    before = populated_store.snapshot()
    with pytest.raises(MalformedImportFile):
        import_ledger(populated_store, text)
    assert populated_store.snapshot() is before


def test_invalid_field_shape_skipped(populated_store):
    result = import_ledger(populated_store, '{"income": "lots", "savings": 10}')
    after = populated_store.snapshot()

    assert result.applied == ["savings"]
    assert len(result.skipped) == 1
    assert isinstance(result.skipped[0], InvalidFieldShape)
    assert "income" in str(result.skipped[0])
    assert after.income == Decimal("50000")
    assert after.savings == Decimal("10")


def test_bad_transaction_skips_whole_field(populated_store):
    before = populated_store.snapshot()
    text = json.dumps(
        {
            "transactions": [
                {"id": "a", "date": "2025-12-01", "name": "Ok", "amount": 5,
                 "type": "debit", "category": "Wants"},
                {"id": "b", "date": "2025-12-02", "name": "Bad", "amount": -5,
                 "type": "debit", "category": "Wants"},
            ]
        }
    )
    result = import_ledger(populated_store, text)

    assert result.applied == []
    assert populated_store.snapshot().transactions == before.transactions


def test_empty_sources_rejected(populated_store):
    result = import_ledger(populated_store, '{"sources": []}')
    assert result.applied == []
    assert len(populated_store.snapshot().sources) == 4


def test_imported_sources_get_one_default(empty_store):
    text = json.dumps(
        {
            "sources": [
                {"id": "a", "name": "A", "type": "Bank", "isDefault": False},
                {"id": "b", "name": "B", "type": "Card", "isDefault": True},
                {"id": "c", "name": "C", "type": "Cash", "isDefault": True},
            ]
        }
    )
    import_ledger(empty_store, text)
    flags = [(s.id, s.is_default) for s in empty_store.snapshot().sources]
    assert flags == [("a", False), ("b", True), ("c", False)]


def test_import_is_single_commit(populated_store, fixtures_dir):
    commits = []
    populated_store.subscribe(commits.append)
    import_ledger(populated_store, (fixtures_dir / "ledger.json").read_text(encoding="utf-8"))
    assert len(commits) == 1


def test_nothing_applied_means_no_commit(populated_store):
    commits = []
    populated_store.subscribe(commits.append)
    import_ledger(populated_store, '{"unknown": 1}')
    assert commits == []


def test_fixture_file_loads(empty_store, fixtures_dir):
    result = import_ledger(empty_store, (fixtures_dir / "ledger.json").read_text(encoding="utf-8"))
    snapshot = empty_store.snapshot()

    assert result.skipped == []
    assert snapshot.income == Decimal("50000")
    assert [t.id for t in snapshot.transactions] == ["t-1", "t-2", "t-3"]
    assert snapshot.transactions[1].amount == Decimal("450.5")


def test_loads_ledger_uses_decimal():
    document = loads_ledger('{"income": 0.1}')
    assert document["income"] == Decimal("0.1")


def test_default_export_filename():
    assert default_export_filename(date(2025, 11, 28)) == "budget_tracker_28-11-2025.json"


def test_dumps_keeps_every_digit(store, transaction_service):
    transaction_service.create_transaction(
        "Flat", Decimal("12345678901234567.89"), date(2025, 11, 5)
    )
    text = dumps_ledger(store.snapshot())

    assert '"amount": 12345678901234567.89' in text
    assert loads_ledger(text)["transactions"][0]["amount"] == Decimal("12345678901234567.89")


def test_large_amount_round_trip(store, transaction_service, empty_store):
    transaction_service.create_transaction(
        "Flat", Decimal("98765432109876543.21"), date(2025, 11, 5)
    )
    import_ledger(empty_store, dumps_ledger(store.snapshot()))

    assert empty_store.snapshot().transactions == store.snapshot().transactions


def test_loads_utf8_bytes():
    document = loads_ledger('{"sources": [{"name": "Café"}]}'.encode("utf-8"))
    assert document["sources"][0]["name"] == "Café"


@pytest.mark.parametrize("content", [b'{"income": 5, "name": "\xff\xfe"}', b"\xff\xfe{}"])
def test_non_utf8_file_changes_nothing(populated_store, content):
    before = populated_store.snapshot()
    with pytest.raises(MalformedImportFile):
        import_ledger(populated_store, content)
    assert populated_store.snapshot() is before
