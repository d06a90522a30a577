"""
Exceptions for Depot
Everything raised on purpose derives from DepotError so the CLI has a
single place to catch and map them to exit codes
"""


class DepotError(Exception):
    # general container for errors
    pass


class StorageError(DepotError):
    # raised on I/O failure, schema corruption or lock contention
    pass


class NotFoundError(DepotError):
    # raised when a key DNE in the depot
    pass


class CryptoError(DepotError):
    # raised on wrong password or tampered ciphertext (never says which)
    pass


class InvalidInputError(DepotError):
    # raised before touching storage (empty key, secret w/o password, ...)
    pass


class PasswordRequiredError(InvalidInputError):
    # raised when fetching a secret entry without a password
    pass
