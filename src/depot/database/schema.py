"""SQLite schema definitions for Depot."""

# SQL schema definitions
SCHEMA_VERSION = 1

CREATE_TABLES = [
    # Entries table - the only persisted entity; secret rows always carry salt + nonce, plain rows never do
    """
    CREATE TABLE IF NOT EXISTS entries (
        key TEXT PRIMARY KEY NOT NULL CHECK (length(key) > 0),
        value BLOB NOT NULL,
        is_secret INTEGER NOT NULL DEFAULT 0 CHECK (is_secret IN (0, 1)),
        salt BLOB,
        nonce BLOB UNIQUE,
        modified INTEGER DEFAULT (strftime('%s', 'now')),
        CHECK (
            (is_secret = 0 AND salt IS NULL AND nonce IS NULL)
            OR (is_secret = 1 AND salt IS NOT NULL AND nonce IS NOT NULL
                AND length(salt) > 0 AND length(nonce) > 0)
        )
    )
    """,
    # Schema version table
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY,
        applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]

# Upsert used by EntryModel.put; replaces the whole row, never merges
UPSERT_ENTRY = """
    INSERT INTO entries (key, value, is_secret, salt, nonce)
    VALUES (?, ?, ?, ?, ?)
    ON CONFLICT (key) DO UPDATE SET
        value = excluded.value,
        is_secret = excluded.is_secret,
        salt = excluded.salt,
        nonce = excluded.nonce,
        modified = (strftime('%s', 'now'))
"""


def get_init_schema():
    """
    Get complete schema initialization SQL

    Returns:
        List of SQL statements to execute
    """
    statements = []
    statements.extend(CREATE_TABLES)
    statements.append(
        f"INSERT OR IGNORE INTO schema_version (version) VALUES ({SCHEMA_VERSION})"
    )
    return statements


def get_drop_schema():
    """
    Get SQL statements to drop all tables for testing

    Returns:
        List of DROP TABLE statements
    """
    return [
        "DROP TABLE IF EXISTS entries",
        "DROP TABLE IF EXISTS schema_version",
    ]
