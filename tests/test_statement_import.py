"""Tests for the statement text importer pipeline."""

from datetime import date
from decimal import Decimal

import pytest

from budgettrack.domain.entities import Category, SubCategory, TransactionType
from budgettrack.domain.errors import NoDatesFound, NoUsableCandidates
from budgettrack.domain.statement_import import (
    FALLBACK_NAME,
    categorize,
    default_category_for_type,
    extract,
    find_date_anchors,
    parse_statement,
    segment,
)
from budgettrack.store.defaults import default_snapshot


THREE_LINES = "\n".join(
    [
        "01-11-2025 Grocery store 250.00",
        "02-11-2025 Electricity bill 1,200.00",
        "03-11-2025 Movie tickets 600.00",
    ]
)


@pytest.fixture
def sub_categories():
    return default_snapshot().sub_categories


class TestSegment:
    """Tests for splitting text into date-anchored blocks."""

    def test_one_block_per_date(self):
        blocks = segment(THREE_LINES)
        assert blocks == [
            "01-11-2025 Grocery store 250.00",
            "02-11-2025 Electricity bill 1,200.00",
            "03-11-2025 Movie tickets 600.00",
        ]

    def test_no_dates_raises(self):
        with pytest.raises(NoDatesFound) as excinfo:
            segment("Opening balance 1,000.00\nClosing balance 2,000.00")
        assert "No dates found" in str(excinfo.value)

    def test_empty_text_raises(self):
        with pytest.raises(NoDatesFound):
            segment("")

    def test_value_date_stays_in_block(self):
        text = (
            "28-11-2025 28-11-2025 Coffee 80.00 1,000.00\n"
            "29-11-2025 29-11-2025 Lunch 150.00 850.00"
        )
        blocks = segment(text)
        assert blocks == [
            "28-11-2025 28-11-2025 Coffee 80.00 1,000.00",
            "29-11-2025 29-11-2025 Lunch 150.00 850.00",
        ]

    def test_slash_separated_dates(self):
        assert segment("28/11/2025 Shop 100.00") == ["28/11/2025 Shop 100.00"]

    def test_trailing_date_starts_own_block(self):
        blocks = segment("05-11-2025 Dinner out 900.00 10-11-2025")
        assert blocks == ["05-11-2025 Dinner out 900.00", "10-11-2025"]

    def test_text_before_first_date_ignored(self):
        blocks = segment("Statement header\nDate Particulars Amount\n01-11-2025 Grocery store 250.00")
        assert blocks == ["01-11-2025 Grocery store 250.00"]

    def test_find_date_anchors_offsets(self):
        assert find_date_anchors("x 01-11-2025 y 02/11/2025") == [2, 15]

    def test_two_digit_year_not_a_date(self):
        with pytest.raises(NoDatesFound):
            segment("01-11-25 Grocery 250.00")


class TestExtract:
    """Tests for field extraction from one block."""

    def test_end_to_end_example(self):
        fields = extract("28-11-2025 UPI/P2M/AMAZON 479.05")
        assert fields is not None
        assert fields.date == date(2025, 11, 28)
        assert fields.amount == Decimal("479.05")
        assert fields.type == TransactionType.DEBIT
        assert fields.name == "AMAZON"

    def test_two_tokens_picks_second_to_last(self):
        fields = extract("15-11-2025 Transfer 1,000.00 5,000.00")
        assert fields.amount == Decimal("1000.00")

    def test_three_tokens_picks_second_to_last(self):
        fields = extract("15-11-2025 Transfer 10.00 1,000.00 5,000.00")
        assert fields.amount == Decimal("1000.00")

    def test_single_token_regardless_of_position(self):
        fields = extract("28-11-2025 479.05 paid at AMAZON")
        assert fields.amount == Decimal("479.05")
        assert fields.name == "paid at AMAZON"

    def test_salary_with_balance_is_credit(self):
        fields = extract("01-12-2025 SALARY ACME 85,000.00 1,37,250.45")
        assert fields.type == TransactionType.CREDIT
        assert fields.amount == Decimal("85000.00")

    def test_salary_without_balance_stays_debit(self):
        fields = extract("01-12-2025 SALARY ACME 85,000.00")
        assert fields.type == TransactionType.DEBIT

    def test_credit_keywords_case_insensitive(self):
        fields = extract("05-12-2025 Refund from store 499.00 10,499.00")
        assert fields.type == TransactionType.CREDIT

    def test_short_description_falls_back(self):
        fields = extract("10-11-2025 -- 250.00")
        assert fields.name == FALLBACK_NAME

    def test_two_letter_description_falls_back(self):
        fields = extract("10-11-2025 ab 250.00")
        assert fields.name == FALLBACK_NAME

    def test_no_decimal_amount_skipped(self):
        assert extract("10-11-2025 Paid 500") is None

    def test_no_amount_skipped(self):
        assert extract("10-11-2025 Opening balance") is None

    def test_no_date_skipped(self):
        assert extract("Paid 500.00") is None

    def test_impossible_date_skipped(self):
        assert extract("31-02-2025 Rent 100.00") is None

    def test_slash_date_normalized(self):
        fields = extract("28/11/2025 Shop 100.00")
        assert fields.date == date(2025, 11, 28)

    def test_name_truncated_to_30(self):
        fields = extract("01-11-2025 ABCDEFGHIJ KLMNOPQRST UVWXYZABCD EFGHIJ 10.00")
        assert fields.name == "ABCDEFGHIJ KLMNOPQRST UVWXYZAB"
        assert len(fields.name) == 30

    def test_neft_reference_stripped(self):
        fields = extract("02-12-2025 NEFT/HDFCN98765/ELECTRICITY BOARD 1,450.00 20,000.00")
        assert fields.name == "ELECTRICITY BOARD"

    def test_upi_reference_and_payment_mode_stripped(self):
        fields = extract(
            "28-11-2025 UPI/P2M/533211987654/AMAZON PAY/Paymen/YES BANK LIMITED YBS 479.05 52,310.45"
        )
        assert fields.name == "AMAZON PAY"

    def test_bank_literal_stripped(self):
        fields = extract("02-12-2025 Rent Payment HDFC BANK LTD 19,000.00 1,18,250.45")
        assert fields.name == "Rent Payment"

    def test_original_description_keeps_raw_text(self):
        fields = extract("01-11-2025 Grocery\nstore 250.00")
        assert fields.original_description == "01-11-2025 Grocery store 250.00..."
        assert fields.name == "Grocery store"

    def test_original_description_limited_to_100_chars(self):
        block = "01-11-2025 " + "X" * 150 + " 10.00"
        fields = extract(block)
        assert fields.original_description == block[:100] + "..."


class TestCategorize:
    """Tests for auto-categorization."""

    def test_credit_goes_to_income(self, sub_categories):
        guess = categorize(Decimal("85000"), TransactionType.CREDIT, sub_categories)
        assert guess.category == Category.INCOME
        assert guess.sub_category_id == "sub-inc-1"

    def test_small_debit_goes_to_miscellaneous(self, sub_categories):
        guess = categorize(Decimal("99.99"), TransactionType.DEBIT, sub_categories)
        assert guess.category == Category.WANTS
        assert guess.sub_category_id == "sub-misc"

    def test_debit_of_100_is_essential(self, sub_categories):
        guess = categorize(Decimal("100"), TransactionType.DEBIT, sub_categories)
        assert guess.category == Category.ESSENTIAL
        assert guess.sub_category_id == "sub-1"

    def test_small_debit_without_miscellaneous_falls_back(self):
        subs = [
            SubCategory("w", "movie", Category.WANTS),
            SubCategory("e", "house", Category.ESSENTIAL),
        ]
        guess = categorize(Decimal("20"), TransactionType.DEBIT, subs)
        assert guess.category == Category.ESSENTIAL
        assert guess.sub_category_id == "e"

    def test_miscellaneous_must_be_under_wants(self):
        subs = [SubCategory("m", "miscellenous", Category.ESSENTIAL)]
        guess = categorize(Decimal("20"), TransactionType.DEBIT, subs)
        assert guess.category == Category.ESSENTIAL
        assert guess.sub_category_id == "m"

    def test_no_sub_categories(self):
        assert categorize(Decimal("5"), TransactionType.CREDIT, []).sub_category_id == ""
        guess = categorize(Decimal("500"), TransactionType.DEBIT, [])
        assert guess.category == Category.ESSENTIAL
        assert guess.sub_category_id == ""

    def test_default_category_for_type(self, sub_categories):
        assert default_category_for_type(TransactionType.DEBIT, sub_categories).category == Category.ESSENTIAL
        assert default_category_for_type(TransactionType.CREDIT, sub_categories).category == Category.INCOME


class TestParseStatement:
    """Tests for the full text -> pending pipeline."""

    def test_statement_fixture(self, fixtures_dir, sub_categories):
        text = (fixtures_dir / "axis_statement.txt").read_text(encoding="utf-8")
        pending = parse_statement(text, sub_categories, source_id="src-1")

        assert [p.name for p in pending] == [
            "AMAZON PAY",
            "RAHUL KUMAR",
            "ACME SALARY CREDIT",
            "Rent Payment",
        ]
        assert [p.amount for p in pending] == [
            Decimal("479.05"),
            Decimal("60.00"),
            Decimal("85000.00"),
            Decimal("19000.00"),
        ]
        assert [p.type for p in pending] == [
            TransactionType.DEBIT,
            TransactionType.DEBIT,
            TransactionType.CREDIT,
            TransactionType.DEBIT,
        ]
        assert [p.category for p in pending] == [
            Category.ESSENTIAL,
            Category.WANTS,
            Category.INCOME,
            Category.ESSENTIAL,
        ]
        assert pending[1].sub_category_id == "sub-misc"
        assert all(p.is_selected for p in pending)
        assert all(p.source_id == "src-1" for p in pending)
        assert len({p.id for p in pending}) == 4

    def test_end_to_end_categorized(self, sub_categories):
        (item,) = parse_statement("28-11-2025 UPI/P2M/AMAZON 479.05", sub_categories)
        assert item.date == date(2025, 11, 28)
        assert item.name == "AMAZON"
        assert item.category == Category.ESSENTIAL
        assert item.sub_category_id == "sub-1"

    def test_no_usable_candidates(self, sub_categories):
        with pytest.raises(NoUsableCandidates):
            parse_statement("10-11-2025 Opening balance carried forward", sub_categories)

    def test_skips_blocks_without_amounts(self, sub_categories):
        text = THREE_LINES + "\n04-11-2025 Closing balance carried forward"
        assert len(parse_statement(text, sub_categories)) == 3

    def test_same_text_same_result(self, sub_categories):
        first = parse_statement(THREE_LINES, sub_categories)
        second = parse_statement(THREE_LINES, sub_categories)
        strip = lambda items: [(p.date, p.name, p.amount, p.type, p.category) for p in items]
        assert strip(first) == strip(second)

    def test_uses_id_factory(self, sub_categories, id_factory):
        pending = parse_statement(THREE_LINES, sub_categories, id_factory=id_factory)
        assert [p.id for p in pending] == ["id-1", "id-2", "id-3"]
