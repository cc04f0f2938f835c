"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..infra.repositories import SQLModelSettingsRepository
from ..models.transaction import Theme
from ..services.ledger_store import LedgerStore
from ..services.persistence import PersistenceAdapter
from ..services.theme import ThemePreference


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: SessionFactory
    settings_repo: SQLModelSettingsRepository
    persistence: PersistenceAdapter
    store: LedgerStore
    theme: ThemePreference

    # Page reference (set after initialization)
    page: Optional[ft.Page] = None

    @property
    def dev_mode(self) -> bool:
        return bool(self.config.DEV_MODE)

    @property
    def theme_mode(self) -> ft.ThemeMode:
        return ft.ThemeMode.LIGHT if self.theme.current is Theme.LIGHT else ft.ThemeMode.DARK


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the database, hydrate the ledger, and load the theme."""

    if config is None:
        config = BaseConfig()

    _, session_factory = bootstrap_database(config)
    settings_repo = SQLModelSettingsRepository(session_factory)
    persistence = PersistenceAdapter(settings_repo)

    return AppContext(
        config=config,
        session_factory=session_factory,
        settings_repo=settings_repo,
        persistence=persistence,
        store=LedgerStore.hydrate(persistence),
        theme=ThemePreference(persistence),
    )
