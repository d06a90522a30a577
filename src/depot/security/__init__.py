"""Security helpers: KDF and value encryption for Depot.

This package provides:
- Argon2id key derivation with fixed parameters
- AES-256-GCM sealing of individual values with a fresh salt and nonce
- best-effort wiping of password and key buffers
"""

from .kdf import generate_salt, derive_key
from .codec import SecretCodec, SealedValue, NONCE_LEN, TAG_LEN
from .memory import secret_buffer, wipe

__all__ = [
    "generate_salt",
    "derive_key",
    "SecretCodec",
    "SealedValue",
    "NONCE_LEN",
    "TAG_LEN",
    "secret_buffer",
    "wipe",
]
