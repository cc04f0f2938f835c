"""Income, expense, and balance totals derived from the ledger."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..models.transaction import Transaction, TransactionKind
from .money import from_cents


@dataclass(frozen=True)
class Aggregates:
    """Totals in minor units; decimal views are exact."""

    income_cents: int = 0
    expense_cents: int = 0

    @property
    def balance_cents(self) -> int:
        return self.income_cents - self.expense_cents

    @property
    def income(self) -> Decimal:
        return from_cents(self.income_cents)

    @property
    def expense(self) -> Decimal:
        return from_cents(self.expense_cents)

    @property
    def balance(self) -> Decimal:
        return from_cents(self.balance_cents)

    def as_dict(self) -> dict[str, float]:
        """Float view for rendering sinks such as the chart."""
        return {
            "income": float(self.income),
            "expense": float(self.expense),
            "balance": float(self.balance),
        }


def compute_aggregates(transactions: Iterable[Transaction]) -> Aggregates:
    """Sum income and expense amounts; the empty ledger gives all zeros."""

    income = 0
    expense = 0
    for tx in transactions:
        if tx.kind is TransactionKind.INCOME:
            income += tx.amount_cents
        else:
            expense += tx.amount_cents
    return Aggregates(income_cents=income, expense_cents=expense)


__all__ = ["Aggregates", "compute_aggregates"]
