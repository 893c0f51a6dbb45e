"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from typing import Callable

# Import entities directly to avoid circular import through domain/__init__.py
from budgettrack.domain.entities import LedgerSnapshot

Listener = Callable[[LedgerSnapshot], None]


class LedgerStore(ABC):
    """Abstract ledger store for budgettrack.

    A store owns exactly one current ``LedgerSnapshot``. Mutations replace the
    whole snapshot, so readers never observe a partially updated collection.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    @abstractmethod
    def connect(self) -> None:
        """Prepare the store for use."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release any resources held by the store."""
        pass

    @abstractmethod
    def snapshot(self) -> LedgerSnapshot:
        """Return the current snapshot."""
        pass

    @abstractmethod
    def _replace(self, snapshot: LedgerSnapshot) -> None:
        """Install a new current snapshot."""
        pass

    def commit(self, snapshot: LedgerSnapshot) -> LedgerSnapshot:
        """Replace the current snapshot and notify subscribers."""
        self._replace(snapshot)
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def update(self, **changes) -> LedgerSnapshot:
        """Replace the named fields of the current snapshot in one commit."""
        return self.commit(self.snapshot().with_changes(**changes))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every committed snapshot.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
