"""Ledger store layer for budgettrack application."""

from budgettrack.store.base import LedgerStore
from budgettrack.store.memory import InMemoryLedgerStore

__all__ = ["LedgerStore", "InMemoryLedgerStore"]
