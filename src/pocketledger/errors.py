"""Error types raised by the ledger engine."""

from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(LedgerError):
    """User input was rejected before any state changed."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class PersistenceError(LedgerError):
    """The durable key-value store could not be used."""

    def __init__(self, message: str, *, key: str):
        super().__init__(message)
        self.key = key


class PersistenceReadError(PersistenceError):
    """A stored entry was missing, unreadable, or malformed."""


class PersistenceWriteError(PersistenceError):
    """A write to the store did not land."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
]
