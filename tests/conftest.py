"""Pytest configuration and shared fixtures for PocketLedger tests.

Fixtures provide an isolated SQLite database per test plus the ledger
services wired on top of it, so nothing touches the real app database.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from pocketledger import models  # noqa: F401  (registers tables)
from pocketledger.infra.database import create_session_factory
from pocketledger.infra.repositories import SQLModelSettingsRepository
from pocketledger.services.ledger_store import IdGenerator, LedgerStore
from pocketledger.services.persistence import PersistenceAdapter
from pocketledger.services.theme import ThemePreference

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app builds at startup."""
    return create_session_factory(db_engine)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session_factory)


@pytest.fixture
def persistence(settings_repo) -> PersistenceAdapter:
    return PersistenceAdapter(settings_repo)


@pytest.fixture
def store(persistence) -> LedgerStore:
    """Empty ledger store over the test database."""
    return LedgerStore.hydrate(persistence)


@pytest.fixture
def theme(persistence) -> ThemePreference:
    return ThemePreference(persistence)


# =============================================================================
# Test Doubles
# =============================================================================


class MemoryStore:
    """Dict-backed key-value store that counts writes."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value


class FixedClock:
    """Clock stuck on one millisecond unless advanced."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def memory_ledger(memory_store):
    """Store + backing memory dict, with a frozen clock for id checks."""
    adapter = PersistenceAdapter(memory_store)
    ledger = LedgerStore(adapter, id_generator=IdGenerator(clock=FixedClock()))
    return ledger, memory_store


@pytest.fixture
def app_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point configuration at a temp data dir and database."""
    data_dir = tmp_path / "instance"
    monkeypatch.setenv("POCKETLEDGER_DATA_DIR", str(data_dir))
    monkeypatch.setenv("POCKETLEDGER_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("POCKETLEDGER_CURRENCY", "TND")
    return data_dir
