"""
Base module with connection lifecycle and schema initialization.

Provides the foundation for all database operations in the Budgie store:
an explicitly owned `Database` holding the single shared SQLite connection,
and `BaseRepository`, which every table repository builds on.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from budgie.config import (
    DB_TIMEOUT,
    DEFAULT_CURRENCY,
    DEFAULT_DANGER_ZONE_AMOUNT,
    DEFAULT_DB_PATH,
    DEFAULT_NOTIFICATIONS_ENABLED,
    DEFAULT_THEME,
    SETTINGS_ROW_ID,
)
from budgie.utils.timestamp import to_millis, utc_now

from .schema import MIGRATIONS, SCHEMA_VERSION

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class StoreNotInitializedError(RuntimeError):
    """Raised when the store is used before initialize() or after close()."""

    def __init__(self, message: str = "Database not initialized. Call initialize() first."):
        super().__init__(message)


class Database:
    """
    Owner of the on-device SQLite store.

    One connection is opened lazily by `initialize()` and shared by every
    repository built on this object. `close()` invalidates it for all of
    them until `initialize()` is called again.
    """

    def __init__(
        self,
        db_path: Optional[Union[Path, str]] = None,
        timeout: float = DB_TIMEOUT,
    ):
        """
        Args:
            db_path: Path to the SQLite database file, or ":memory:".
                Defaults to data/budgie.db
            timeout: Seconds to wait on a locked database
        """
        self.db_path = db_path or DEFAULT_DB_PATH
        self.timeout = timeout
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "Database":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_initialized(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """The live connection; fails fast when the store is not initialized."""
        if self._conn is None:
            raise StoreNotInitializedError()
        return self._conn

    def initialize(self) -> sqlite3.Connection:
        """
        Open the store, create or migrate the schema and seed settings.

        Idempotent: when a connection already exists it is returned with
        no side effects.

        Returns:
            The shared connection
        """
        if self._conn is not None:
            return self._conn

        if str(self.db_path) != IN_MEMORY:
            self._ensure_db_directory()

        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row

        try:
            conn.execute("PRAGMA journal_mode = WAL")
            self._migrate(conn)
            self._seed_settings(conn)
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}", exc_info=True)
            conn.close()
            raise

        self._conn = conn
        logger.info(f"Database initialized at {self.db_path}")
        return conn

    def close(self) -> None:
        """Close the connection. Safe to call when already closed."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Database closed")

    def _ensure_db_directory(self):
        """Ensure the database directory exists."""
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Database directory ensured: {Path(self.db_path).parent}")
        except Exception as e:
            logger.error(f"Failed to create database directory: {e}", exc_info=True)
            raise

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager committing on success and rolling back on error."""
        conn = self.connection
        try:
            yield conn
            conn.commit()
        except sqlite3.OperationalError as e:
            logger.error(f"Database locked or operational error: {e}", exc_info=True)
            conn.rollback()
            raise
        except Exception as e:
            logger.error(f"Database error: {e}", exc_info=True)
            conn.rollback()
            raise

    def schema_version(self) -> int:
        """Schema version recorded in the store."""
        return self.connection.execute("PRAGMA user_version").fetchone()[0]

    def _migrate(self, conn: sqlite3.Connection):
        """Apply every migration newer than the store's recorded version."""
        conn.execute("BEGIN IMMEDIATE")
        current = conn.execute("PRAGMA user_version").fetchone()[0]
        if current >= SCHEMA_VERSION:
            conn.commit()
            logger.debug(f"Schema up to date at version {current}")
            return

        for version in range(current + 1, SCHEMA_VERSION + 1):
            for statement in MIGRATIONS[version]:
                conn.execute(statement)
            # PRAGMA does not accept bound parameters
            conn.execute(f"PRAGMA user_version = {int(version)}")
            logger.info(f"Applied schema migration to version {version}")
        conn.commit()

    def _seed_settings(self, conn: sqlite3.Connection):
        """Insert the default settings row if and only if the table is empty."""
        # Reserve the write lock first so concurrent initializers see each other's row
        conn.execute("BEGIN IMMEDIATE")
        count = conn.execute("SELECT COUNT(*) AS count FROM settings").fetchone()["count"]
        if count > 0:
            conn.commit()
            return

        now = to_millis(utc_now())
        conn.execute(
            """
            INSERT INTO settings (
                id, dangerZoneAmount, currency, theme,
                notificationsEnabled, createdAt, updatedAt
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                SETTINGS_ROW_ID,
                DEFAULT_DANGER_ZONE_AMOUNT,
                DEFAULT_CURRENCY,
                DEFAULT_THEME,
                1 if DEFAULT_NOTIFICATIONS_ENABLED else 0,
                now,
                now,
            ),
        )
        conn.commit()
        logger.info("Seeded default settings")


class BaseRepository:
    """
    Base repository class over a shared `Database`.

    Provides transaction handling for all table repositories. The database
    must be initialized before any repository method is called.
    """

    def __init__(self, database: Database):
        """
        Args:
            database: The store these operations run against
        """
        self.database = database

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for a unit of work on the shared connection."""
        with self.database.transaction() as conn:
            yield conn
