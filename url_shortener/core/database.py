"""Database module for URL Shortener Service.

This module defines the store abstraction the shortener depends on, its
SQLite implementation, and dependency injection for FastAPI endpoints.
"""

import sqlite3
import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from .config import settings
from .exceptions import StoreUnavailableError, UniquenessViolationError
from ..models.url import UrlMapping

logger = logging.getLogger(__name__)


class UrlMappingStore(ABC):
    """Abstract store of short code to original URL mappings.

    Implementations must enforce uniqueness on both ``short_code`` and
    ``original_url``: when two saves race on the same key exactly one wins
    and the other raises :class:`UniquenessViolationError`. Any other failure
    is raised as :class:`StoreUnavailableError`.
    """

    @abstractmethod
    def find_by_short_code(self, short_code: str) -> Optional[UrlMapping]:
        """Get the mapping for a short code, or None."""

    @abstractmethod
    def find_by_original_url(self, original_url: str) -> Optional[UrlMapping]:
        """Get the mapping for an original URL, or None."""

    @abstractmethod
    def save(self, mapping: UrlMapping) -> UrlMapping:
        """Persist a new mapping.

        Raises:
            UniquenessViolationError: The code or the URL is already mapped.
            StoreUnavailableError: The store failed for any other reason.
        """

    @abstractmethod
    def count(self) -> int:
        """Number of stored mappings."""

    def init_db(self) -> None:
        """Prepare the store for use."""

    def close(self) -> None:
        """Release store resources."""


class Database(UrlMappingStore):
    """SQLite-backed mapping store."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        if db_path:
            self.db_path = db_path
        else:
            self.db_path = settings.database_url
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the shared database connection.

        The connection is shared between threads; every use goes through
        ``self._lock``.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            try:
                self._connection = sqlite3.connect(
                    self.db_path,
                    check_same_thread=False
                )
            except sqlite3.Error as e:
                logger.error(f"Could not open database {self.db_path}: {e}")
                raise StoreUnavailableError(f"Could not open database: {e}") from e
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS url_mapping (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            short_code VARCHAR(10) NOT NULL UNIQUE,
            original_url VARCHAR(2048) NOT NULL UNIQUE
        )
        """
        with self._lock:
            conn = self._get_connection()
            try:
                with conn:
                    conn.execute(create_table_sql)
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StoreUnavailableError(f"Database initialization failed: {e}") from e

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list[dict]]:
        """Execute a SQL query in its own transaction.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, None otherwise.

        Raises:
            UniquenessViolationError: A UNIQUE constraint rejected the write.
            StoreUnavailableError: Any other SQLite failure.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                with conn:
                    cursor = conn.execute(query, params)
                    if fetch:
                        return [dict(row) for row in cursor.fetchall()]
                return None
            except sqlite3.IntegrityError as e:
                logger.debug(f"Constraint violation: {e}")
                raise UniquenessViolationError(str(e)) from e
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreUnavailableError(f"Query execution failed: {e}") from e

    def _find_one(self, column: str, value: str) -> Optional[UrlMapping]:
        """Get the mapping whose unique column equals a value.

        Args:
            column: Unique column name, never user input.
            value: Value to match.

        Returns:
            Mapping or None if not found.
        """
        query = f"SELECT short_code, original_url FROM url_mapping WHERE {column} = ?"
        results = self.execute(query, (value,), fetch=True)
        return UrlMapping(**results[0]) if results else None

    def find_by_short_code(self, short_code: str) -> Optional[UrlMapping]:
        """Get mapping by short code.

        Args:
            short_code: The short URL code.

        Returns:
            Mapping or None if not found.
        """
        return self._find_one("short_code", short_code)

    def find_by_original_url(self, original_url: str) -> Optional[UrlMapping]:
        """Get mapping by original URL.

        Args:
            original_url: The original long URL.

        Returns:
            Mapping or None if not found.
        """
        return self._find_one("original_url", original_url)

    def save(self, mapping: UrlMapping) -> UrlMapping:
        """Insert a new mapping.

        Args:
            mapping: The mapping to persist.

        Returns:
            The persisted mapping.
        """
        query = "INSERT INTO url_mapping (short_code, original_url) VALUES (?, ?)"
        self.execute(query, (mapping.short_code, mapping.original_url))
        logger.info(f"Saved mapping: {mapping.short_code}")
        return mapping

    def count(self) -> int:
        """Count stored mappings.

        Returns:
            Number of rows in the mapping table.
        """
        results =self.execute("SELECT COUNT(*) AS total FROM url_mapping", fetch=True)
        return results[0]["total"] if results else 0


# Global database instance
db = Database()


def get_db() -> UrlMappingStore:
    """Get database instance for dependency injection.

    Returns:
        Database instance.
    """
    return db
