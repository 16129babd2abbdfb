"""Tests for the database lifecycle: initialization, migrations and seeding."""

import sqlite3
import threading

import pytest

from budgie.config import SETTINGS_ROW_ID
from budgie.db import BudgieRepository, Database, StoreNotInitializedError
from budgie.db.schema import SCHEMA_VERSION
from budgie.models import TransactionCategory, TransactionInput, TransactionType


def test_initialize_creates_tables(database):
    rows = database.connection.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    tables = {row["name"] for row in rows}
    assert {"transactions", "budgets", "subscriptions", "settings"} <= tables


def test_initialize_creates_indexes(database):
    rows = database.connection.execute(
        "SELECT name FROM sqlite_master WHERE type = 'index'"
    ).fetchall()
    indexes = {row["name"] for row in rows}
    assert "idx_transactions_timestamp" in indexes
    assert "idx_transactions_type" in indexes
    assert "idx_transactions_category" in indexes


def test_initialize_is_idempotent(database):
    first = database.connection
    assert database.initialize() is first
    assert database.initialize() is first


def test_settings_seeded_once(db_path):
    for _ in range(3):
        db = Database(db_path)
        db.initialize()
        db.close()

    with Database(db_path) as db:
        count = db.connection.execute("SELECT COUNT(*) FROM settings").fetchone()[0]
        row = db.connection.execute("SELECT * FROM settings").fetchone()

    assert count == 1
    assert row["id"] == SETTINGS_ROW_ID
    assert row["dangerZoneAmount"] == 0
    assert row["currency"] == "USD"
    assert row["theme"] == "system"
    assert row["notificationsEnabled"] == 1


def test_concurrent_initializers_seed_settings_once(db_path):
    workers = 8
    barrier = threading.Barrier(workers)
    errors = []

    def initialize():
        db = Database(db_path)
        try:
            barrier.wait()
            db.initialize()
        except Exception as e:
            errors.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=initialize) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with Database(db_path) as db:
        count = db.connection.execute("SELECT COUNT(*) FROM settings").fetchone()[0]
        version = db.schema_version()

    assert count == 1
    assert version == SCHEMA_VERSION


def test_schema_version_recorded(database):
    assert database.schema_version() == SCHEMA_VERSION


def test_wal_journal_mode(database):
    mode = database.connection.execute("PRAGMA journal_mode").fetchone()[0]
    assert mode.lower() == "wal"


def test_creates_missing_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "budgie.db"
    with Database(path):
        pass
    assert path.exists()


def test_in_memory_store():
    with Database(":memory:") as db:
        repository = BudgieRepository(db)
        assert repository.get_transactions() == []


def test_operations_before_initialize_raise(db_path):
    repository = BudgieRepository(Database(db_path))

    with pytest.raises(StoreNotInitializedError):
        repository.get_transactions()
    with pytest.raises(StoreNotInitializedError):
        repository.get_budgets()
    with pytest.raises(StoreNotInitializedError):
        repository.get_database_stats()


def test_operations_after_close_raise(database, repository):
    database.close()

    assert not database.is_initialized
    with pytest.raises(StoreNotInitializedError):
        repository.get_settings()


def test_close_is_safe_twice(database):
    database.close()
    database.close()
    assert not database.is_initialized


def test_reinitialize_after_close_keeps_data(database, repository):
    created = repository.add_transaction(
        TransactionInput(
            amount=12.5,
            type=TransactionType.EXPENSE,
            category=TransactionCategory.FOOD,
        )
    )
    database.close()
    database.initialize()

    assert repository.get_transaction(created.id) == created


def test_not_initialized_error_is_runtime_error():
    assert issubclass(StoreNotInitializedError, RuntimeError)


def test_check_constraint_rejects_raw_invalid_type(database):
    with pytest.raises(sqlite3.IntegrityError):
        database.connection.execute(
            """
            INSERT INTO transactions (
                id, amount, type, category, description,
                timestamp, createdAt, updatedAt
            ) VALUES ('x', 10, 'transfer', 'food', NULL, 0, 0, 0)
            """
        )


def test_check_constraint_rejects_raw_non_positive_amount(database):
    with pytest.raises(sqlite3.IntegrityError):
        database.connection.execute(
            """
            INSERT INTO budgets (id, category, amount, period, createdAt, updatedAt)
            VALUES ('b', 'food', 0, 'monthly', 0, 0)
            """
        )


def test_failed_write_rolls_back(database, repository):
    with pytest.raises(sqlite3.IntegrityError):
        with database.transaction() as conn:
            conn.execute(
                """
                INSERT INTO budgets (id, category, amount, period, createdAt, updatedAt)
                VALUES ('a', 'food', 10, 'monthly', 0, 0)
                """
            )
            conn.execute(
                """
                INSERT INTO budgets (id, category, amount, period, createdAt, updatedAt)
                VALUES ('b', 'travel', -1, 'monthly', 0, 0)
                """
            )

    assert repository.get_budgets() == []
