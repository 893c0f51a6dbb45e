"""JSON file backed ledger store."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from budgettrack.domain.entities import LedgerSnapshot
from budgettrack.domain.exchange import apply_document, dumps_ledger, loads_ledger
from budgettrack.store.defaults import default_snapshot
from budgettrack.store.memory import InMemoryLedgerStore

logger = logging.getLogger(__name__)


class JSONFileLedgerStore(InMemoryLedgerStore):
    """In-memory store that mirrors every commit to a ledger file.

    The file uses the same JSON layout as export and import, so it can be
    copied, loaded elsewhere, or edited by hand.
    """

    def __init__(self, ledger_path: str):
        """Initialize file store.

        Args:
            ledger_path: Path to the JSON ledger file
        """
        super().__init__()
        self.ledger_path = Path(ledger_path)

    def connect(self) -> None:
        """Load the ledger file, seeding defaults when it doesn't exist.

        Raises:
            MalformedImportFile: If the file exists but is not UTF-8 JSON
        """
        seed = default_snapshot()
        if not self.ledger_path.exists():
            logger.debug("No ledger at %s, starting from defaults", self.ledger_path)
            self._replace(seed)
            return

        document = loads_ledger(self.ledger_path.read_bytes())
        snapshot, result = apply_document(seed, document)
        for skipped in result.skipped:
            logger.warning("%s: %s", self.ledger_path, skipped)
        self._replace(snapshot)

    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    def commit(self, snapshot: LedgerSnapshot) -> LedgerSnapshot:
        """Replace the snapshot and write it to the ledger file."""
        self.save(snapshot)
        return super().commit(snapshot)

    def save(self, snapshot: Optional[LedgerSnapshot] = None) -> None:
        """Write a snapshot atomically (temp file, then rename)."""
        snapshot = snapshot if snapshot is not None else self.snapshot()
        self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.ledger_path.parent, prefix=".ledger-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(dumps_ledger(snapshot))
            os.replace(tmp_path, self.ledger_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug("Wrote ledger to %s", self.ledger_path)
