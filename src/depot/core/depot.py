"""
Depot: a key-value store with optional encryption.

Use it as a repository for reminders, trivia, or sensitive information such
as passwords. Plaintext values are stored as given; secret values are sealed
by :class:`~depot.security.codec.SecretCodec` before they reach the database
and opened again after they leave it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .exceptions import (
    InvalidInputError,
    NotFoundError,
    PasswordRequiredError,
    StorageError,
)
from ..database.connection import DEFAULT_TIMEOUT, DatabaseConnection
from ..database.models import EntryModel, validate_key
from ..security.codec import SecretCodec

logger = logging.getLogger(__name__)


class Depot:
    """Stow, fetch and drop values by key in one SQLite file."""

    def __init__(
        self,
        db_path: str | Path,
        timeout: float = DEFAULT_TIMEOUT,
        codec: Optional[SecretCodec] = None,
    ):
        self.db = DatabaseConnection(db_path, timeout=timeout)
        self.db.initialize()
        self.entries = EntryModel(self.db)
        self.codec = codec or SecretCodec()

    def __enter__(self) -> "Depot":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.db.close()

    def stow(
        self,
        key: str,
        value: bytes,
        secret: bool = False,
        password: Optional[str | bytes] = None,
    ) -> None:
        """
        Store ``value`` under ``key``, replacing any existing entry.

        When ``secret`` is set the value is encrypted with a key derived from
        ``password`` and a fresh salt; the password is required in that case
        and ignored otherwise.
        """
        validate_key(key)
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidInputError("value must be bytes")

        if not secret:
            self.entries.put(key, bytes(value))
            return

        if not password:
            raise InvalidInputError("a password is required to stow a secret value")
        sealed = self.codec.encrypt(bytes(value), password, _aad(key))
        self.entries.put(
            key,
            sealed.ciphertext,
            is_secret=True,
            salt=sealed.salt,
            nonce=sealed.nonce,
        )

    def fetch(self, key: str, password: Optional[str | bytes] = None) -> bytes:
        """
        Return the value stored under ``key``.

        Raises :class:`NotFoundError` if absent, :class:`PasswordRequiredError`
        if the entry is secret and no password was given, and
        :class:`~depot.core.exceptions.CryptoError` if the password is wrong or
        the stored ciphertext has been altered. A failed decryption leaves the
        entry untouched.
        """
        entry = self.entries.get(key)
        if entry is None:
            raise NotFoundError(f"key not found: {key}")

        if not entry.is_secret:
            return entry.value

        if not password:
            raise PasswordRequiredError("password required but not supplied")
        if entry.salt is None or entry.nonce is None:
            raise StorageError(f"secret entry '{key}' is missing its salt or nonce")

        return self.codec.decrypt(
            entry.value, entry.salt, entry.nonce, password, _aad(key)
        )

    def drop(self, key: str) -> None:
        """Delete ``key`` permanently; raise :class:`NotFoundError` if absent."""
        if not self.entries.delete(key):
            raise NotFoundError(f"key not found: {key}")

    def is_secret(self, key: str) -> bool:
        """Report whether ``key`` holds an encrypted value."""
        flag = self.entries.is_secret(key)
        if flag is None:
            raise NotFoundError(f"key not found: {key}")
        return flag

    def keys(self) -> List[str]:
        return self.entries.list_keys()

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and bool(key) and self.entries.exists(key)


def _aad(key: str) -> bytes:
    # binds a ciphertext to the key it was stowed under
    return key.encode("utf-8")
