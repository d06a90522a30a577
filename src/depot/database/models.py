"""ORM-style helpers for the entries table."""

import logging
import sqlite3

from .schema import UPSERT_ENTRY
from ..core.models import Entry
from ..core.exceptions import InvalidInputError, StorageError

logger = logging.getLogger(__name__)


def validate_key(key):
    """Reject anything that is not a non-empty, UTF-8 encodable string key."""
    if not isinstance(key, str) or not key:
        raise InvalidInputError("key must be a non-empty string")
    try:
        key.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidInputError("key must be valid UTF-8 text") from None


class BaseModel:
    """Base class for DB models."""

    __slots__ = ("db",)

    def __init__(self, db):
        """Initialize with a DatabaseConnection."""
        self.db = db


class EntryModel(BaseModel):
    """DB model for entries."""

    def put(self, key, value, is_secret=False, salt=None, nonce=None):
        """Insert or wholly replace the entry for key in a single transaction."""
        validate_key(key)
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidInputError("value must be bytes")
        if is_secret:
            if not salt or not nonce:
                raise InvalidInputError("secret entries require a salt and a nonce")
            salt, nonce = bytes(salt), bytes(nonce)
        elif salt is not None or nonce is not None:
            raise InvalidInputError("plaintext entries carry no salt or nonce")

        params = (key, bytes(value), int(bool(is_secret)), salt, nonce)
        try:
            with self.db.get_transaction_context() as cursor:
                cursor.execute(UPSERT_ENTRY, params)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to store key '{key}': {e}") from e

        logger.debug("stored key %r (secret=%s)", key, bool(is_secret))

    def get(self, key):
        """Get entry by key, or None if absent."""
        validate_key(key)
        query = """
            SELECT key, value, is_secret, salt, nonce, modified
            FROM entries WHERE key = ?
        """
        try:
            row = self.db.fetch_one(query, (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read key '{key}': {e}") from e

        return Entry.from_row(row) if row else None

    def delete(self, key):
        """Delete entry by key; return False if there was nothing to delete."""
        validate_key(key)
        try:
            with self.db.get_transaction_context() as cursor:
                cursor.execute("DELETE FROM entries WHERE key = ?", (key,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageError(f"Failed to delete key '{key}': {e}") from e

        logger.debug("delete key %r: %s", key, "removed" if deleted else "absent")
        return deleted

    def exists(self, key):
        """Return True if key is present."""
        return self.is_secret(key) is not None

    def is_secret(self, key):
        """Return the secret flag for key, or None if absent."""
        validate_key(key)
        try:
            row = self.db.fetch_one("SELECT is_secret FROM entries WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read key '{key}': {e}") from e

        return bool(row["is_secret"]) if row else None

    def list_keys(self):
        """List all keys in sorted order."""
        try:
            rows = self.db.fetch_all("SELECT key FROM entries ORDER BY key")
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list keys: {e}") from e

        return [row["key"] for row in rows]
