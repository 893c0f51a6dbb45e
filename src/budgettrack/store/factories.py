"""Store factory functions for creating ledger store instances."""

import os
from pathlib import Path
from typing import Optional

from budgettrack.store.json_file import JSONFileLedgerStore

LEDGER_PATH_ENV = "BUDGETTRACK_LEDGER_PATH"


def create_ledger_store(ledger_path: Optional[str] = None) -> JSONFileLedgerStore:
    """Create a file backed ledger store.

    Args:
        ledger_path: Path to the JSON ledger file. If None, checks the
            BUDGETTRACK_LEDGER_PATH environment variable, then defaults to
            ~/.budgettrack/ledger.json

    Returns:
        JSONFileLedgerStore instance (not yet connected)
    """
    if ledger_path is None:
        # Check environment variable
        ledger_path = os.environ.get(LEDGER_PATH_ENV)

    if ledger_path is None:
        # Default to ~/.budgettrack/ledger.json
        home = Path.home()
        store_dir = home / ".budgettrack"
        store_dir.mkdir(exist_ok=True)
        ledger_path = str(store_dir / "ledger.json")

    return JSONFileLedgerStore(ledger_path)
