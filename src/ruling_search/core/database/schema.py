"""SQLite schema for the user-imported collection."""

import sqlite3
from pathlib import Path

from ruling_search.config import DOCUMENTS_TABLE

# No id column: imported rulings are addressed by position.
_SCHEMA_SQL = f"""\
CREATE TABLE IF NOT EXISTS {DOCUMENTS_TABLE} (
    title TEXT,
    content TEXT
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the documents table if it does not exist. Existing rows are kept."""
    conn.executescript(_SCHEMA_SQL)
    conn.commit()


def ensure_database(path: Path) -> None:
    """Create the database file and its documents table if missing."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        create_schema(conn)
    finally:
        conn.close()
