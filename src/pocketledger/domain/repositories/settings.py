"""Key-value store protocol."""

from __future__ import annotations

from typing import Optional, Protocol


class SettingsRepository(Protocol):
    """String-keyed durable storage for serialized ledger state."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string for ``key`` or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Create or replace the entry for ``key``."""
        ...
