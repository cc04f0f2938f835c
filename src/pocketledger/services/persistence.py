"""Durable load/save of ledger transactions and the theme preference.

Storage failures never propagate out of this module. Reads fall back to the
empty ledger or the default theme; writes are logged and dropped while the
in-memory state stays authoritative.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..config import BaseConfig
from ..domain.repositories import SettingsRepository
from ..errors import PersistenceReadError, PersistenceWriteError
from ..logging_config import get_logger
from ..models.transaction import DEFAULT_THEME, Theme, Transaction, TransactionKind
from .money import from_cents, to_cents

logger = get_logger(__name__)

TRANSACTIONS_KEY = BaseConfig.TRANSACTIONS_KEY
THEME_KEY = BaseConfig.THEME_KEY

_STORE_ERRORS = (SQLAlchemyError, OSError)


def transaction_to_record(tx: Transaction) -> dict[str, Any]:
    return {
        "id": tx.id,
        "type": tx.kind.value,
        "amount": float(from_cents(tx.amount_cents)),
        "date": tx.date,
        "category": tx.category,
    }


def _text_field(record: dict, name: str) -> str:
    value = record.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PersistenceReadError(f"Field {name!r} is not a string", key=TRANSACTIONS_KEY)
    return value


def record_to_transaction(record: Any) -> Transaction:
    """Rebuild a transaction from its stored record, rejecting anything malformed."""

    if not isinstance(record, dict):
        raise PersistenceReadError("Transaction record is not an object", key=TRANSACTIONS_KEY)

    raw_id = record.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)) or str(raw_id) == "":
        raise PersistenceReadError("Transaction record has no id", key=TRANSACTIONS_KEY)

    try:
        kind = TransactionKind(record.get("type"))
    except ValueError as exc:
        raise PersistenceReadError(
            f"Unknown transaction type {record.get('type')!r}", key=TRANSACTIONS_KEY
        ) from exc

    raw_amount = record.get("amount")
    if isinstance(raw_amount, bool) or not isinstance(raw_amount, (int, float, str)):
        raise PersistenceReadError("Transaction amount is not numeric", key=TRANSACTIONS_KEY)
    try:
        amount = Decimal(repr(raw_amount)) if isinstance(raw_amount, float) else Decimal(raw_amount)
        cents = to_cents(amount) if amount.is_finite() else 0
    except InvalidOperation as exc:
        raise PersistenceReadError("Transaction amount is not numeric", key=TRANSACTIONS_KEY) from exc
    if cents <= 0:
        raise PersistenceReadError("Transaction amount is not positive", key=TRANSACTIONS_KEY)

    return Transaction(
        id=str(raw_id),
        kind=kind,
        amount_cents=cents,
        date=_text_field(record, "date"),
        category=_text_field(record, "category"),
    )


def serialize_transactions(transactions: Iterable[Transaction]) -> str:
    return json.dumps([transaction_to_record(tx) for tx in transactions], ensure_ascii=False)


def deserialize_transactions(raw: str) -> tuple[Transaction, ...]:
    """Decode the stored JSON array, preserving order.

    Raises:
        PersistenceReadError: invalid JSON, a malformed record, or duplicate ids.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise PersistenceReadError("Stored transactions are not valid JSON", key=TRANSACTIONS_KEY) from exc
    if not isinstance(payload, list):
        raise PersistenceReadError("Stored transactions are not a list", key=TRANSACTIONS_KEY)

    transactions = tuple(record_to_transaction(record) for record in payload)
    ids = [tx.id for tx in transactions]
    if len(set(ids)) != len(ids):
        raise PersistenceReadError("Stored transactions contain duplicate ids", key=TRANSACTIONS_KEY)
    return transactions


class PersistenceAdapter:
    """Reads and writes ledger state through a key-value store."""

    def __init__(self, store: SettingsRepository):
        self.store = store

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except _STORE_ERRORS as exc:
            raise PersistenceReadError(f"Could not read {key!r}: {exc}", key=key) from exc

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except _STORE_ERRORS as exc:
            raise PersistenceWriteError(f"Could not write {key!r}: {exc}", key=key) from exc

    def load_transactions(self) -> tuple[Transaction, ...]:
        """Return the stored ledger, or an empty one if absent or unreadable."""
        try:
            raw = self._read(TRANSACTIONS_KEY)
            if raw is None:
                return ()
            transactions = deserialize_transactions(raw)
        except PersistenceReadError as exc:
            logger.warning(
                "Stored transactions unreadable; starting with an empty ledger",
                extra={"event": "persistence_read_error", "key": exc.key, "reason": str(exc)},
            )
            return ()
        logger.info("Loaded transactions", extra={"count": len(transactions)})
        return transactions

    def save_transactions(self, transactions: Sequence[Transaction]) -> bool:
        """Write the full collection; returns False if the write did not land."""
        try:
            self._write(TRANSACTIONS_KEY, serialize_transactions(transactions))
        except PersistenceWriteError as exc:
            logger.error(
                "Saving transactions failed; in-memory ledger kept",
                extra={"event": "persistence_write_error", "key": exc.key, "reason": str(exc)},
            )
            return False
        return True

    def load_theme(self) -> Theme:
        try:
            raw = self._read(THEME_KEY)
        except PersistenceReadError as exc:
            logger.warning(
                "Stored theme unreadable; using default",
                extra={"event": "persistence_read_error", "key": exc.key, "reason": str(exc)},
            )
            return DEFAULT_THEME
        if raw is None:
            return DEFAULT_THEME
        try:
            return Theme(raw.strip().lower())
        except ValueError:
            logger.warning(
                "Stored theme malformed; using default",
                extra={"event": "persistence_read_error", "key": THEME_KEY, "value": raw},
            )
            return DEFAULT_THEME

    def save_theme(self, theme: Theme) -> bool:
        try:
            self._write(THEME_KEY, Theme(theme).value)
        except PersistenceWriteError as exc:
            logger.error(
                "Saving theme failed",
                extra={"event": "persistence_write_error", "key": exc.key, "reason": str(exc)},
            )
            return False
        return True


__all__ = [
    "PersistenceAdapter",
    "THEME_KEY",
    "TRANSACTIONS_KEY",
    "deserialize_transactions",
    "record_to_transaction",
    "serialize_transactions",
    "transaction_to_record",
]
