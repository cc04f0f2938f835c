"""Owner of the in-memory transaction collection."""

from __future__ import annotations

import re
import time
from typing import Callable, Iterable, Optional

from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.transaction import Transaction, TransactionKind
from .aggregates import Aggregates, compute_aggregates
from .money import AmountInput, parse_amount_cents
from .persistence import PersistenceAdapter

logger = get_logger(__name__)

Snapshot = tuple[Transaction, ...]
Listener = Callable[[Snapshot], None]


_NUMERIC_ID = re.compile(r"[0-9]{1,19}")


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Issue millisecond-timestamp ids that never repeat.

    Each id is at least one greater than the previous one, so bursts inside a
    single clock tick still get distinct, increasing ids.
    """

    def __init__(self, clock: Callable[[], int] = _wall_clock_ms, seen: Iterable[str] = ()):
        self._clock = clock
        self._last = 0
        self.observe(seen)

    def observe(self, ids: Iterable[str]) -> None:
        """Advance past numeric ids that already exist; other ids are left alone."""
        for value in ids:
            if _NUMERIC_ID.fullmatch(value):
                self._last = max(self._last, int(value))

    def next_id(self, taken: Optional[set[str]] = None) -> str:
        candidate = max(self._clock(), self._last + 1)
        while taken and str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)


def parse_kind(raw: TransactionKind | str) -> TransactionKind:
    if isinstance(raw, TransactionKind):
        return raw
    token = raw.strip().lower() if isinstance(raw, str) else raw
    try:
        return TransactionKind(token)
    except ValueError as exc:
        raise ValidationError(
            "Type must be 'income' or 'expense'", field="kind", value=raw
        ) from exc


class LedgerStore:
    """Sole mutator of the ledger; persists and notifies after each change."""

    def __init__(
        self,
        persistence: PersistenceAdapter,
        *,
        transactions: Iterable[Transaction] = (),
        id_generator: IdGenerator | None = None,
    ):
        self._persistence = persistence
        self._transactions: list[Transaction] = list(transactions)
        self._ids = id_generator or IdGenerator()
        self._ids.observe(tx.id for tx in self._transactions)
        self._listeners: list[Listener] = []

    @classmethod
    def hydrate(cls, persistence: PersistenceAdapter, **kwargs) -> "LedgerStore":
        """Build a store from whatever the persistence layer can read."""
        return cls(persistence, transactions=persistence.load_transactions(), **kwargs)

    def list(self) -> Snapshot:
        """Transactions, newest first."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((tx for tx in self._transactions if tx.id == transaction_id), None)

    def aggregates(self) -> Aggregates:
        return compute_aggregates(self._transactions)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback receiving each post-mutation snapshot."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(
        self,
        kind: TransactionKind | str,
        amount: AmountInput | None,
        date: str | None = "",
        category: str | None = "",
    ) -> Transaction:
        """Record a new transaction at the head of the ledger.

        Raises:
            ValidationError: bad kind or amount; nothing is mutated or written.
        """
        parsed_kind = parse_kind(kind)
        cents = parse_amount_cents(amount)

        tx = Transaction(
            id=self._ids.next_id({t.id for t in self._transactions}),
            kind=parsed_kind,
            amount_cents=cents,
            date=(date or "").strip(),
            category=(category or "").strip(),
        )
        self._transactions.insert(0, tx)
        logger.info(
            "Transaction added",
            extra={"transaction_id": tx.id, "kind": tx.kind.value, "amount_cents": tx.amount_cents},
        )
        self._commit()
        return tx

    def remove(self, transaction_id: str) -> bool:
        """Drop the matching transaction; unknown ids are a no-op returning False."""
        remaining = [tx for tx in self._transactions if tx.id != transaction_id]
        removed = len(remaining) != len(self._transactions)
        self._transactions = remaining
        if removed:
            logger.info("Transaction removed", extra={"transaction_id": transaction_id})
        else:
            logger.debug("Remove ignored; id not found", extra={"transaction_id": transaction_id})
        self._commit()
        return removed

    def _commit(self) -> None:
        snapshot = self.list()
        self._persistence.save_transactions(snapshot)
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["IdGenerator", "LedgerStore", "Listener", "Snapshot", "parse_kind"]
