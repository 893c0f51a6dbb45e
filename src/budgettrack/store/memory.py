"""In-memory ledger store implementation."""

from typing import Optional

from budgettrack.domain.entities import LedgerSnapshot
from budgettrack.store.base import LedgerStore


class InMemoryLedgerStore(LedgerStore):
    """Ledger store that keeps the current snapshot in memory only."""

    def __init__(self, initial: Optional[LedgerSnapshot] = None):
        """Initialize in-memory store.

        Args:
            initial: Starting snapshot (defaults to an empty ledger)
        """
        super().__init__()
        self._snapshot = initial if initial is not None else LedgerSnapshot()

    def connect(self) -> None:
        """Connect to the store."""
        # Nothing to open
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    def snapshot(self) -> LedgerSnapshot:
        """Return the current snapshot."""
        return self._snapshot

    def _replace(self, snapshot: LedgerSnapshot) -> None:
        self._snapshot = snapshot
