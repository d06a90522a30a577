import os

from argon2.low_level import Type, hash_secret_raw

# Fixed derivation parameters. Entries do not record them, so changing any of
# these makes every existing secret undecryptable.
TIME_COST = 3
MEMORY_COST = 65536
PARALLELISM = 1
KEY_LEN = 32
SALT_LEN = 16


def generate_salt(length: int = SALT_LEN) -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(length)


def derive_key(password: str | bytes | bytearray, salt: bytes) -> bytearray:
    """
    Derive a per-entry key from a password and salt using Argon2id.
    Returns the raw key in a mutable buffer so the caller can wipe it.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    # argon2-cffi only accepts immutable bytes for the secret
    return bytearray(
        hash_secret_raw(
            secret=bytes(password),
            salt=bytes(salt),
            time_cost=TIME_COST,
            memory_cost=MEMORY_COST,
            parallelism=PARALLELISM,
            hash_len=KEY_LEN,
            type=Type.ID,
        )
    )
