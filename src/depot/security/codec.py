"""
Secret codec for Depot values.

Every secret value is sealed under its own key:

- a fresh random salt feeds Argon2id (:mod:`depot.security.kdf`) together
  with the caller's password
- a fresh random 96-bit nonce drives AES-256-GCM
  (:class:`cryptography.hazmat.primitives.ciphers.aead.AESGCM`)

The codec keeps no state between calls. The password and derived key only
live for the duration of a single ``encrypt``/``decrypt`` call and are
zeroed (best effort) before it returns.
"""

from __future__ import annotations

import logging
import os
from typing import NamedTuple, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .kdf import SALT_LEN, derive_key, generate_salt
from .memory import secret_buffer, wipe
from ..core.exceptions import CryptoError, InvalidInputError

logger = logging.getLogger(__name__)

NONCE_LEN = 12
TAG_LEN = 16


class SealedValue(NamedTuple):
    """Ciphertext (with tag) plus the material needed to open it again."""

    ciphertext: bytes
    salt: bytes
    nonce: bytes


class SecretCodec:
    """
    Password-based authenticated encryption of single values.

    ``decrypt`` raises one generic :class:`CryptoError` for every failure so
    callers cannot tell a wrong password from tampered data.
    """

    def encrypt(
        self,
        plaintext: bytes,
        password: str | bytes,
        associated_data: Optional[bytes] = None,
    ) -> SealedValue:
        """
        Seal ``plaintext`` under a key derived from ``password``.

        ``associated_data`` is authenticated but not encrypted; the same bytes
        must be supplied to :meth:`decrypt`.
        """
        _check_password(password)
        salt = generate_salt()
        nonce = os.urandom(NONCE_LEN)

        with secret_buffer(password) as pw:
            key = derive_key(pw, salt)
        try:
            ct = AESGCM(key).encrypt(nonce, bytes(plaintext), associated_data)
        finally:
            wipe(key)

        logger.debug("sealed %d bytes", len(plaintext))
        return SealedValue(ciphertext=ct, salt=salt, nonce=nonce)

    def decrypt(
        self,
        ciphertext: bytes,
        salt: bytes,
        nonce: bytes,
        password: str | bytes,
        associated_data: Optional[bytes] = None,
    ) -> bytes:
        """Open a value produced by :meth:`encrypt` or raise :class:`CryptoError`."""
        _check_password(password)
        if (
            not salt
            or len(salt) != SALT_LEN
            or not nonce
            or len(nonce) != NONCE_LEN
            or len(ciphertext) < TAG_LEN
        ):
            raise CryptoError("wrong password or corrupted data")

        with secret_buffer(password) as pw:
            key = derive_key(pw, bytes(salt))
        try:
            return AESGCM(key).decrypt(bytes(nonce), bytes(ciphertext), associated_data)
        except InvalidTag:
            raise CryptoError("wrong password or corrupted data") from None
        finally:
            wipe(key)


def _check_password(password) -> None:
    if not isinstance(password, (str, bytes, bytearray)):
        raise InvalidInputError("password must be a string or bytes")
    if not password:
        raise InvalidInputError("password must not be empty")
    if isinstance(password, str):
        try:
            password.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidInputError("password must be valid UTF-8 text") from None
