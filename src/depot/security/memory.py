"""Best-effort handling of password and key buffers.

Python gives no guarantee that a ``str`` or ``bytes`` object is ever
overwritten, so passwords are copied into a ``bytearray`` for the length of
one derivation and zeroed afterwards. Copies made by the interpreter or by
the caller are out of reach.
"""
from contextlib import contextmanager


def wipe(buf: bytearray) -> None:
    """Overwrite a mutable buffer with zeros in place."""
    for i in range(len(buf)):
        buf[i] = 0


def to_buffer(secret: str | bytes | bytearray) -> bytearray:
    if isinstance(secret, str):
        return bytearray(secret.encode("utf-8"))
    return bytearray(secret)


@contextmanager
def secret_buffer(secret: str | bytes | bytearray):
    """Yield ``secret`` as a bytearray and zero it on exit."""
    buf = to_buffer(secret)
    try:
        yield buf
    finally:
        wipe(buf)
