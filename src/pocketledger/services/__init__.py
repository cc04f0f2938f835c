"""Ledger services: money, aggregates, persistence, store, and theme."""

from .aggregates import Aggregates, compute_aggregates
from .ledger_store import IdGenerator, LedgerStore
from .persistence import PersistenceAdapter
from .theme import ThemePreference

__all__ = [
    "Aggregates",
    "IdGenerator",
    "LedgerStore",
    "PersistenceAdapter",
    "ThemePreference",
    "compute_aggregates",
]
