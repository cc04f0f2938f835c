"""Light/dark preference with a single toggle transition."""

from __future__ import annotations

from typing import Callable

from ..logging_config import get_logger
from ..models.transaction import Theme
from .persistence import PersistenceAdapter

logger = get_logger(__name__)

ThemeApplier = Callable[[Theme], None]


class ThemePreference:
    """Tracks the current theme and persists every change."""

    def __init__(self, persistence: PersistenceAdapter, initial: Theme | None = None):
        self._persistence = persistence
        self._current = initial if initial is not None else persistence.load_theme()
        self._appliers: list[ThemeApplier] = []

    @property
    def current(self) -> Theme:
        return self._current

    def on_apply(self, applier: ThemeApplier) -> Callable[[], None]:
        """Register a callback run on every theme change; returns its remover."""
        self._appliers.append(applier)

        def remove() -> None:
            if applier in self._appliers:
                self._appliers.remove(applier)

        return remove

    def apply_current(self) -> Theme:
        for applier in self._appliers:
            applier(self._current)
        return self._current

    def toggle(self) -> Theme:
        """Flip the theme, apply it, persist it, and return the new value."""
        self._current = self._current.opposite
        logger.info("Theme toggled", extra={"theme": self._current.value})
        self.apply_current()
        self._persistence.save_theme(self._current)
        return self._current


__all__ = ["ThemeApplier", "ThemePreference"]
