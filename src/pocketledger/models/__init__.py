"""Ledger models and SQLModel table exports."""

from .settings import AppSetting
from .transaction import DEFAULT_THEME, Theme, Transaction, TransactionKind

__all__ = [
    "AppSetting",
    "DEFAULT_THEME",
    "Theme",
    "Transaction",
    "TransactionKind",
]
