"""PocketLedger: personal income/expense ledger with a flet desktop shell."""

from __future__ import annotations

from .config import BaseConfig
from .desktop.context import create_app_context

__all__ = ["BaseConfig", "create_app_context"]
