"""Settings repository for app-level key/value pairs."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.settings import AppSetting
from ..database import SessionFactory


class SQLModelSettingsRepository:
    """SQLModel-based key-value store over the ``app_setting`` table."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """Return the raw stored string for ``key`` or None if absent."""
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            return setting.value if setting else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            setting = session.exec(select(AppSetting).where(AppSetting.key == key)).first()
            if setting:
                setting.value = value
            else:
                session.add(AppSetting(key=key, value=value))


__all__ = ["SQLModelSettingsRepository"]
