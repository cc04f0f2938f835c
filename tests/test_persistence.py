from __future__ import annotations

import json

import pytest
from sqlalchemy.exc import OperationalError

from pocketledger.errors import PersistenceReadError
from pocketledger.models import Theme, Transaction, TransactionKind
from pocketledger.services.persistence import (
    THEME_KEY,
    TRANSACTIONS_KEY,
    PersistenceAdapter,
    deserialize_transactions,
    serialize_transactions,
)


class _BrokenStore:
    """Store whose every call fails like a locked or full database."""

    def get(self, key):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def set(self, key, value):
        raise OperationalError("UPDATE", {}, Exception("database or disk is full"))


SAMPLE = (
    Transaction(id="1700000000002", kind=TransactionKind.EXPENSE, amount_cents=4000, date="2024-01-02", category=""),
    Transaction(id="1700000000001", kind=TransactionKind.INCOME, amount_cents=10000, date="2024-01-01", category="Salary"),
)


def test_round_trip_preserves_order_and_fields(persistence):
    assert persistence.save_transactions(SAMPLE) is True

    assert persistence.load_transactions() == SAMPLE


def test_stored_layout_uses_plain_records(settings_repo, persistence):
    persistence.save_transactions(SAMPLE)

    records = json.loads(settings_repo.get(TRANSACTIONS_KEY))
    assert records[1] == {
        "id": "1700000000001",
        "type": "income",
        "amount": 100.0,
        "date": "2024-01-01",
        "category": "Salary",
    }
    assert [r["type"] for r in records] == ["expense", "income"]


def test_missing_key_loads_empty(persistence):
    assert persistence.load_transactions() == ()


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "{\"id\": \"1\"}",
        "[{\"id\": \"1\", \"type\": \"transfer\", \"amount\": 5}]",
        "[{\"id\": \"1\", \"type\": \"income\", \"amount\": -5}]",
        "[{\"id\": \"1\", \"type\": \"income\", \"amount\": \"lots\"}]",
        "[{\"type\": \"income\", \"amount\": 5}]",
        "[{\"id\": \"1\", \"type\": \"income\", \"amount\": 5}, {\"id\": \"1\", \"type\": \"expense\", \"amount\": 2}]",
        "[{\"id\": \"1\", \"type\": \"income\", \"amount\": 5, \"date\": 20240101}]",
        "[42]",
    ],
)
def test_corrupt_content_loads_empty(settings_repo, persistence, raw):
    settings_repo.set(TRANSACTIONS_KEY, raw)

    assert persistence.load_transactions() == ()


def test_corrupt_content_is_logged(settings_repo, persistence, caplog):
    settings_repo.set(TRANSACTIONS_KEY, "{{{")

    with caplog.at_level("WARNING", logger="pocketledger"):
        persistence.load_transactions()

    assert any(getattr(r, "event", None) == "persistence_read_error" for r in caplog.records)


def test_deserialize_raises_named_error():
    with pytest.raises(PersistenceReadError) as excinfo:
        deserialize_transactions("[1, 2")
    assert excinfo.value.key == TRANSACTIONS_KEY


def test_legacy_records_with_numeric_ids_and_missing_text_fields():
    raw = json.dumps([{"id": 1704067200000, "type": "income", "amount": 12.5}])

    (tx,) = deserialize_transactions(raw)

    assert tx.id == "1704067200000"
    assert tx.amount_cents == 1250
    assert (tx.date, tx.category) == ("", "")


def test_serialize_is_json_array():
    assert json.loads(serialize_transactions([])) == []


def test_read_failure_degrades_to_defaults():
    adapter = PersistenceAdapter(_BrokenStore())

    assert adapter.load_transactions() == ()
    assert adapter.load_theme() is Theme.DARK


def test_write_failure_is_reported_not_raised(caplog):
    adapter = PersistenceAdapter(_BrokenStore())

    with caplog.at_level("ERROR", logger="pocketledger"):
        assert adapter.save_transactions(SAMPLE) is False
        assert adapter.save_theme(Theme.LIGHT) is False

    assert sum(getattr(r, "event", None) == "persistence_write_error" for r in caplog.records) == 2


def test_theme_defaults_to_dark(persistence):
    assert persistence.load_theme() is Theme.DARK


@pytest.mark.parametrize("raw", ["blue", "", "LIGHTISH"])
def test_malformed_theme_defaults_to_dark(settings_repo, persistence, raw):
    settings_repo.set(THEME_KEY, raw)

    assert persistence.load_theme() is Theme.DARK


def test_theme_round_trip(settings_repo, persistence):
    assert persistence.save_theme(Theme.LIGHT) is True

    assert settings_repo.get(THEME_KEY) == "light"
    assert persistence.load_theme() is Theme.LIGHT


def test_settings_repository_overwrites_in_place(settings_repo):
    assert settings_repo.get("k") is None

    settings_repo.set("k", "one")
    settings_repo.set("k", "two")

    assert settings_repo.get("k") == "two"


def test_large_ledger_fits_in_one_entry(persistence):
    many = tuple(
        Transaction(id=str(i), kind=TransactionKind.EXPENSE, amount_cents=i + 1, category="x" * 40)
        for i in range(2000)
    )

    persistence.save_transactions(many)

    assert persistence.load_transactions() == many
