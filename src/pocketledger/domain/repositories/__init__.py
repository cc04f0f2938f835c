"""Repository protocols for the ledger domain."""

from .settings import SettingsRepository

__all__ = ["SettingsRepository"]
