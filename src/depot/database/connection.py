"""SQLite connection and initialization utilities."""

import logging
import sqlite3
from pathlib import Path

from .schema import get_init_schema
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

# Seconds to wait on a locked database before giving up with StorageError
DEFAULT_TIMEOUT = 5.0


class DatabaseConnection:
    """Manage the SQLite connection and schema init."""

    __slots__ = ("db_path", "timeout", "_connection", "_initialized")

    def __init__(self, db_path="./depot.db", timeout=DEFAULT_TIMEOUT):
        """Initialize connection state."""
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._connection = None
        self._initialized = False

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def initialize(self):
        """Create the database file and schema if not already present."""
        if self._initialized:
            return

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create database directory: {e}") from e

        try:
            self._get_connection()
            with self.get_transaction_context() as cursor:
                for statement in get_init_schema():
                    cursor.execute(statement)
        except sqlite3.Error as e:
            self.close()
            raise StorageError(f"Failed to initialize database: {e}") from e

        self._initialized = True
        logger.debug("opened %s (schema version %d)", self.db_path, self.get_version())

    def _get_connection(self):
        """Get or create the SQLite connection."""
        if self._connection is None:
            # isolation_level=None: transactions are opened explicitly by TransactionContext
            self._connection = sqlite3.connect(
                str(self.db_path), timeout=self.timeout, isolation_level=None
            )
            self._connection.row_factory = sqlite3.Row

        return self._connection

    def get_cursor_context(self):
        """Return a context manager for a SQLite cursor."""
        return CursorContext(self._get_connection())

    def get_transaction_context(self):
        """Return a transaction context manager (BEGIN IMMEDIATE/COMMIT/ROLLBACK)."""
        return TransactionContext(self._get_connection())

    def execute(self, query, params=None):
        """Execute a single SQL statement and return the affected row count."""
        with self.get_cursor_context() as cursor:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            return cursor.rowcount

    def fetch_one(self, query, params=None):
        """Fetch a single row as a dict or None."""
        with self.get_cursor_context() as cursor:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)

            row = cursor.fetchone()
            return dict(row) if row else None

    def fetch_all(self, query, params=None):
        """Fetch all rows as a list of dicts."""
        with self.get_cursor_context() as cursor:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)

            return [dict(row) for row in cursor.fetchall()]

    def get_version(self):
        """Return current schema version number."""
        try:
            result = self.fetch_one("SELECT MAX(version) as version FROM schema_version")
            return result["version"] if result and result["version"] else 0
        except sqlite3.Error:
            return 0

    def close(self):
        """Close the connection if open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self._initialized = False


class CursorContext:
    """Context manager for SQLite cursor."""

    __slots__ = ("connection", "cursor")

    def __init__(self, connection):
        """Initialize with a SQLite connection."""
        self.connection = connection
        self.cursor = None

    def __enter__(self):
        """Create and return a cursor."""
        self.cursor = self.connection.cursor()
        return self.cursor

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Close the cursor."""
        if self.cursor:
            self.cursor.close()


class TransactionContext:
    """Context manager for write transactions (BEGIN IMMEDIATE/COMMIT/ROLLBACK)."""

    __slots__ = ("connection", "cursor")

    def __init__(self, connection):
        """Initialize with a SQLite connection."""
        self.connection = connection
        self.cursor = None

    def __enter__(self):
        """Take the write lock up front and return a cursor."""
        self.cursor = self.connection.cursor()
        try:
            self.cursor.execute("BEGIN IMMEDIATE")
        except sqlite3.Error:
            self.cursor.close()
            raise
        return self.cursor

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Commit on success, rollback on error or failed commit, then close cursor."""
        try:
            if exc_type is None:
                try:
                    self.connection.commit()
                except sqlite3.Error:
                    self.connection.rollback()
                    raise
            else:
                self.connection.rollback()
        finally:
            if self.cursor:
                self.cursor.close()
