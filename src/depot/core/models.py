"""
Base data model for a depot entry
"""


class Entry:
    # One key/value row; value is ciphertext when is_secret is set
    __slots__ = (
        "key",
        "value",
        "is_secret",
        "salt",
        "nonce",
        "modified",
    )

    def __init__(self, key, value=b"", is_secret=False, salt=None, nonce=None, modified=None):
        """
            Initialize an entry
        """
        self.key = key
        self.value = bytes(value)
        self.is_secret = bool(is_secret)
        self.salt = bytes(salt) if salt is not None else None
        self.nonce = bytes(nonce) if nonce is not None else None
        self.modified = modified

    @classmethod
    def from_row(cls, row):
        """
            Build an entry from a database row dict
        """
        return cls(
            key=row["key"],
            value=row["value"],
            is_secret=row["is_secret"],
            salt=row.get("salt"),
            nonce=row.get("nonce"),
            modified=row.get("modified"),
        )

    def __repr__(self):
        # never render the value, it may be ciphertext or a plaintext secret
        kind = "secret" if self.is_secret else "plain"
        return f"Entry(key={self.key!r}, {kind}, {len(self.value)} bytes)"
