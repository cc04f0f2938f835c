"""Ledger value objects: transactions, their direction, and the UI theme."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Direction of money flow; the only carrier of sign."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "Income" if self is TransactionKind.INCOME else "Expense"


class Theme(str, Enum):
    """Two-valued presentation preference."""

    LIGHT = "light"
    DARK = "dark"

    @property
    def opposite(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


DEFAULT_THEME = Theme.DARK


@dataclass(frozen=True)
class Transaction:
    """A single recorded income or expense entry.

    ``amount_cents`` is the strictly positive magnitude in minor units;
    ``date`` is kept exactly as the user typed it.
    """

    id: str
    kind: TransactionKind
    amount_cents: int
    date: str = ""
    category: str = ""

    @property
    def amount(self) -> Decimal:
        return Decimal(self.amount_cents).scaleb(-2)

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME

    @property
    def label(self) -> str:
        """Category, or the kind's display name when no category was given."""
        return self.category or self.kind.label
