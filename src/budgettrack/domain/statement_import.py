"""Bank statement text importer.

Pasted statement text goes through three pure stages:

1. ``segment`` splits the text into blocks, each anchored on a
   ``DD-MM-YYYY`` (or ``DD/MM/YYYY``) date.
2. ``extract`` pulls the date, amount, direction and a cleaned description
   out of one block.
3. ``categorize`` assigns a best-guess category and sub-category.

``parse_statement`` chains the stages and stages the results as
``PendingTransaction`` values for review.
"""

import logging
import re
import uuid
from decimal import Decimal
from typing import Callable, Optional, Sequence

from budgettrack.domain.entities import (
    Category,
    CategoryGuess,
    PendingTransaction,
    StatementFields,
    SubCategory,
    TransactionType,
)
from budgettrack.domain.errors import (
    NoDatesFound,
    NoUsableCandidates,
    no_dates_found,
    no_usable_candidates,
)
from budgettrack.utils.amount_parser import parse_amount
from budgettrack.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{2}[-/]\d{2}[-/]\d{4}")

# Statement money always carries two decimals; bare integers are never amounts.
MONEY_PATTERN = re.compile(r"[\d,]+\.\d{2}")

# A later date closer than this (trimmed) is a value-date on the same record.
MIN_RECORD_SPAN = 15
MIN_BLOCK_LENGTH = 5

CREDIT_KEYWORDS = ("SALARY", "CREDIT", "REFUND")

BOILERPLATE_PATTERNS = [
    re.compile(r"UPI/P2[MA]/(?:\d+/)?"),
    re.compile(r"NEFT/[A-Z0-9]+/"),
    re.compile(r"/Paymen/.*", re.IGNORECASE),
    re.compile(r"YES BANK LIMITED YBS", re.IGNORECASE),
    re.compile(r"HDFC BANK LTD", re.IGNORECASE),
    re.compile(r"AXIS BANK", re.IGNORECASE),
]

FALLBACK_NAME = "Imported Transaction"
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 30
ORIGINAL_DESCRIPTION_LENGTH = 100

SMALL_DEBIT_LIMIT = Decimal("100")
MISCELLANEOUS_NAME = "miscellenous"


def find_date_anchors(text: str) -> list[int]:
    """Return the start offset of every date match, in document order."""
    return [match.start() for match in DATE_PATTERN.finditer(text)]


def segment(text: str) -> list[str]:
    """Split statement text into date-anchored blocks.

    A block runs from its date anchor to the next anchor that is more than
    ``MIN_RECORD_SPAN`` characters (trimmed) away, or to the end of the text.
    Anchors passed over this way are secondary dates inside the same record
    and do not start blocks of their own.

    Args:
        text: Raw pasted statement text

    Returns:
        Blocks in document order

    Raises:
        NoDatesFound: If the text contains no date anchors
    """
    anchors = find_date_anchors(text)
    if not anchors:
        raise NoDatesFound(no_dates_found())

    blocks = []
    i = 0
    while i < len(anchors):
        start = anchors[i]
        next_i = len(anchors)
        end = len(text)
        for j in range(i + 1, len(anchors)):
            if len(text[start:anchors[j]].strip()) > MIN_RECORD_SPAN:
                next_i = j
                end = anchors[j]
                break

        block = text[start:end].strip()
        if len(block) >= MIN_BLOCK_LENGTH:
            blocks.append(block)
        else:
            logger.debug("Discarding short block at offset %d", start)
        i = next_i

    logger.debug("Segmented %d date anchors into %d blocks", len(anchors), len(blocks))
    return blocks


def clean_description(raw: str) -> str:
    """Strip bank boilerplate and punctuation from a description."""
    for pattern in BOILERPLATE_PATTERNS:
        raw = pattern.sub("", raw)
    raw = re.sub(r"[^\w\s]", " ", raw, flags=re.ASCII)
    return re.sub(r"\s+", " ", raw).strip()


def extract(block: str) -> Optional[StatementFields]:
    """Extract transaction fields from one statement block.

    Args:
        block: One segmented block

    Returns:
        Extracted fields, or None when the block has no usable date or amount
    """
    date_match = DATE_PATTERN.search(block)
    if date_match is None:
        return None
    try:
        txn_date = parse_statement_date(date_match.group())
    except ValueError:
        logger.debug("Skipping block with impossible date %r", date_match.group())
        return None

    tokens = MONEY_PATTERN.findall(block)
    if not tokens:
        logger.debug("Skipping block without amount: %r", block[:40])
        return None

    values = [parse_amount(token) for token in tokens]
    txn_type = TransactionType.DEBIT
    if len(values) >= 2:
        # Trailing pair is (amount, running balance)
        amount = values[-2]
        upper = block.upper()
        if any(keyword in upper for keyword in CREDIT_KEYWORDS):
            txn_type = TransactionType.CREDIT
    else:
        amount = values[0]

    raw = DATE_PATTERN.sub("", block)
    for token in tokens:
        raw = raw.replace(token, "", 1)
    name = clean_description(raw)
    if len(name) < MIN_NAME_LENGTH:
        name = FALLBACK_NAME

    original = block[:ORIGINAL_DESCRIPTION_LENGTH].replace("\r", "").replace("\n", " ")
    return StatementFields(
        date=txn_date,
        amount=amount,
        type=txn_type,
        name=name[:MAX_NAME_LENGTH].rstrip(),
        original_description=original + "...",
    )


def _first_under(sub_categories: Sequence[SubCategory], parent: Category) -> str:
    for sub_category in sub_categories:
        if sub_category.parent_id == parent:
            return sub_category.id
    return ""


def default_category_for_type(
    txn_type: TransactionType, sub_categories: Sequence[SubCategory]
) -> CategoryGuess:
    """Return the canonical category for a direction.

    Credits go to Income, debits to Essential, each with the first
    sub-category under that category (or none).
    """
    category = Category.INCOME if txn_type == TransactionType.CREDIT else Category.ESSENTIAL
    return CategoryGuess(category, _first_under(sub_categories, category))


def categorize(
    amount: Decimal, txn_type: TransactionType, sub_categories: Sequence[SubCategory]
) -> CategoryGuess:
    """Guess the category of an imported transaction.

    Small debits land in Wants under the "miscellenous" sub-category when it
    exists; everything else takes the default for its direction.
    """
    if txn_type == TransactionType.DEBIT and amount < SMALL_DEBIT_LIMIT:
        for sub_category in sub_categories:
            if sub_category.name == MISCELLANEOUS_NAME and sub_category.parent_id == Category.WANTS:
                return CategoryGuess(Category.WANTS, sub_category.id)
    return default_category_for_type(txn_type, sub_categories)


def _new_id() -> str:
    return str(uuid.uuid4())


def parse_statement(
    text: str,
    sub_categories: Sequence[SubCategory],
    source_id: str = "",
    id_factory: Callable[[], str] = _new_id,
) -> tuple[PendingTransaction, ...]:
    """Run segmentation, extraction and categorization over pasted text.

    Args:
        text: Raw statement text
        sub_categories: Sub-categories available for auto-categorization
        source_id: Source attributed to every candidate
        id_factory: Produces pending item IDs

    Returns:
        Pending transactions, all selected

    Raises:
        NoDatesFound: If the text has no date anchors
        NoUsableCandidates: If no block produced a candidate
    """
    blocks = segment(text)

    pending = []
    for block in blocks:
        fields = extract(block)
        if fields is None:
            continue
        guess = categorize(fields.amount, fields.type, sub_categories)
        pending.append(
            PendingTransaction(
                id=id_factory(),
                date=fields.date,
                name=fields.name,
                amount=fields.amount,
                type=fields.type,
                category=guess.category,
                sub_category_id=guess.sub_category_id,
                source_id=source_id,
                original_description=fields.original_description,
                is_selected=True,
            )
        )

    if not pending:
        raise NoUsableCandidates(no_usable_candidates(len(blocks)))

    logger.debug("Parsed %d candidates from %d blocks", len(pending), len(blocks))
    return tuple(pending)
