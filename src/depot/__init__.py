"""Depot is a key-value store with optional encryption, backed by SQLite."""

from .core.depot import Depot
from .core.exceptions import (
    CryptoError,
    DepotError,
    InvalidInputError,
    NotFoundError,
    PasswordRequiredError,
    StorageError,
)

__version__ = "0.2.0"

__all__ = [
    "Depot",
    "DepotError",
    "CryptoError",
    "InvalidInputError",
    "NotFoundError",
    "PasswordRequiredError",
    "StorageError",
]
