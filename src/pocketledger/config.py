"""Environment-backed settings for the ledger app."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "POCKETLEDGER_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default).strip()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read ``POCKETLEDGER_<name>`` as a boolean switch."""

    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _writable_dir(candidate: Path, app_name: str) -> Path:
    """Create ``candidate`` or fall back to a per-user directory when it is protected."""

    try:
        target = candidate.expanduser().resolve()
        target.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        user_root = os.getenv("LOCALAPPDATA") or os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        target = (Path(user_root).expanduser() / app_name).resolve()
        target.mkdir(parents=True, exist_ok=True)
    return target


class BaseConfig:
    """Settings shared by every environment.

    ``TRANSACTIONS_KEY`` and ``THEME_KEY`` name the two entries the ledger
    keeps in the key-value store.
    """

    APP_NAME = "PocketLedger"
    DB_FILENAME = "pocketledger.db"
    TRANSACTIONS_KEY = "transactions"
    THEME_KEY = "theme"

    def __init__(self) -> None:
        self.DATA_DIR = _writable_dir(Path(_env("DATA_DIR", "instance")), self.APP_NAME)
        self.DEV_MODE = _env_flag("DEV_MODE", default=True)
        self.CURRENCY = _env("CURRENCY", "TND")
        self.DATABASE_URL = _env("DATABASE_URL", "") or f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Keyword arguments for ``create_engine``."""

        # flet handlers may run off the thread that opened the connection
        return {"connect_args": {"check_same_thread": False}}

