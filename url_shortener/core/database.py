"""Database module for URL Shortener Service.

This module handles SQLite persistence of alias to URL mappings and
provides dependency injection for FastAPI endpoints. The UNIQUE constraint
on ``alias`` is what keeps concurrent saves of the same alias from both
succeeding.
"""

import sqlite3
import logging
from typing import Optional, Protocol

from .config import settings
from .exceptions import AliasExistsError, StorageError, URLNotFoundError

logger = logging.getLogger(__name__)


class URLStore(Protocol):
    """Durable alias to URL mapping store."""

    def save_url(self, url: str, alias: str) -> int: ...

    def get_url(self, alias: str) -> str: ...


class Database:
    """Database class for managing the SQLite connection and URL mappings."""

    def __init__(self, db_path: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize database connection settings.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
            timeout: Seconds to wait on a locked database before failing.
        """
        self.db_path = db_path or settings.database_url
        self.timeout = timeout if timeout is not None else settings.database_timeout
        self._connection: Optional[sqlite3.Connection] = None

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is shared by every request handled on the event loop,
        which may not be the thread that opened it.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                timeout=self.timeout,
                check_same_thread=False,
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def init_db(self) -> None:
        """Create the mapping table and alias index if they are absent."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS url (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            alias TEXT NOT NULL UNIQUE,
            url TEXT NOT NULL
        )
        """
        create_index_sql = "CREATE INDEX IF NOT EXISTS idx_alias ON url(alias)"
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(create_table_sql)
            cursor.execute(create_index_sql)
            conn.commit()
            logger.info("Database initialized successfully")
        except sqlite3.Error as e:
            logger.error(f"Database initialization failed: {e}")
            raise StorageError("failed to initialize database") from e

    def ping(self) -> None:
        """Run a trivial query to check the database is usable."""
        try:
            self._get_connection().execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"database at {self.db_path} is unavailable") from e

    def save_url(self, url: str, alias: str) -> int:
        """Insert a new alias to URL mapping.

        Args:
            url: The original long URL.
            alias: The alias to store it under.

        Returns:
            The id assigned to the new mapping.

        Raises:
            AliasExistsError: The alias is already stored.
            StorageError: Any other persistence fault.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "INSERT INTO url (url, alias) VALUES (?, ?)", (url, alias)
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise AliasExistsError(f"alias {alias!r} already exists") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Insert failed for alias {alias!r}: {e}")
            raise StorageError("failed to save url") from e

        logger.info(f"Saved url under alias: {alias}")
        return cursor.lastrowid

    def get_url(self, alias: str) -> str:
        """Get the URL stored under an alias.

        Args:
            alias: The alias to look up. Matching is case-sensitive.

        Returns:
            The stored URL.

        Raises:
            URLNotFoundError: No mapping exists for the alias.
            StorageError: Any other persistence fault.
        """
        try:
            row = self._get_connection().execute(
                "SELECT url FROM url WHERE alias = ?", (alias,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Query failed for alias {alias!r}: {e}")
            raise StorageError("failed to get url") from e

        if row is None:
            raise URLNotFoundError(f"alias {alias!r} not found")
        return row["url"]


# Global database instance
db = Database()


def get_db() -> Database:
    """Get database instance for dependency injection.

    Returns:
        Database instance.
    """
    return db

