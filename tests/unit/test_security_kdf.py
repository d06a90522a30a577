"""Unit tests for the Key Derivation Function (KDF) module."""

import pytest
from depot.security import kdf
from depot.security.kdf import generate_salt, derive_key


def test_generate_salt_defaults():
    """Ensure salt generation returns bytes of the default length (16)."""
    salt = generate_salt()
    assert isinstance(salt, bytes)
    assert len(salt) == 16


def test_generate_salt_custom_length():
    """Ensure salt generation respects the length parameter."""
    salt = generate_salt(length=32)
    assert len(salt) == 32
    assert isinstance(salt, bytes)


def test_generate_salt_is_random():
    assert generate_salt() != generate_salt()


def test_derive_key_returns_mutable_buffer():
    """The derived key comes back as a bytearray so it can be wiped."""
    key = derive_key(b"secure_bytes_password", generate_salt())

    assert isinstance(key, bytearray)
    assert len(key) == kdf.KEY_LEN


def test_derive_key_string_and_bytes_agree():
    """Ensure passing the same password as str, bytes or bytearray yields the same key."""
    salt = generate_salt()
    from_str = derive_key("password123", salt)
    from_bytes = derive_key(b"password123", salt)
    from_buffer = derive_key(bytearray(b"password123"), salt)

    assert from_str == from_bytes == from_buffer


def test_derive_key_depends_on_salt_and_password():
    salt = generate_salt()
    base = derive_key(b"pw", salt)

    assert derive_key(b"pw", generate_salt()) != base
    assert derive_key(b"pw2", salt) != base


def test_derive_key_is_deterministic():
    salt = b"\x01" * 16
    assert derive_key(b"pw", salt) == derive_key(b"pw", salt)


def test_derive_key_accepts_bytearray_password():
    """The codec hands the KDF a wipeable bytearray; it must be accepted as is."""
    salt = generate_salt()
    password = bytearray(b"from-a-buffer")

    key = derive_key(password, salt)

    assert key == derive_key(b"from-a-buffer", salt)
    assert password == bytearray(b"from-a-buffer")


def test_kdf_parameters_are_fixed_argon2id_constants():
    """Derivation parameters are constants of the system, not per-entry values."""
    assert (kdf.TIME_COST, kdf.MEMORY_COST, kdf.PARALLELISM) == (3, 65536, 1)
    assert (kdf.KEY_LEN, kdf.SALT_LEN) == (32, 16)
