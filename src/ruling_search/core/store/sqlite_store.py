"""SQLite-backed collection store: one database file per collection."""

import sqlite3
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from ruling_search.config import DOCUMENTS_TABLE
from ruling_search.core.search.query_builder import Query
from ruling_search.errors import StoreError


def _select_sql(query: Query) -> str:
    sql = f"SELECT {', '.join(query.columns)} FROM {DOCUMENTS_TABLE} WHERE {query.where}"
    if query.order_by:
        sql += f" ORDER BY {query.order_by}"
    return sql


class SqliteCollectionStore:
    """Run queries against per-collection SQLite files.

    A fresh connection is opened for every operation, so the store can be
    shared between request threads. Read-only collections are opened with
    ``mode=ro``: a missing file is an error rather than a new empty database.
    """

    def __init__(self, paths: Mapping[str, Path], *, writable: Sequence[str] = ()) -> None:
        self.paths = dict(paths)
        self.writable = frozenset(writable)

    @contextmanager
    def _connect(self, collection: str) -> Iterator[sqlite3.Connection]:
        path = self.paths.get(collection)
        if path is None:
            msg = f"No database configured for collection {collection!r}"
            raise StoreError(msg)
        mode = "rwc" if collection in self.writable else "ro"
        try:
            conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode={mode}", uri=True)
        except sqlite3.Error as e:
            msg = f"Cannot open {path}: {e}"
            raise StoreError(msg) from e
        try:
            yield conn
        finally:
            conn.close()

    def list_columns(self, collection: str) -> list[str]:
        with self._connect(collection) as conn:
            try:
                rows = conn.execute(f"PRAGMA table_info({DOCUMENTS_TABLE})").fetchall()
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e
        # PRAGMA table_info returns: cid, name, type, notnull, dflt_value, pk
        return [row[1] for row in rows]

    def query(self, collection: str, query: Query) -> list[tuple[Any, ...]]:
        with self._connect(collection) as conn:
            try:
                return conn.execute(_select_sql(query), query.params).fetchall()
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e

    def query_one(self, collection: str, query: Query) -> tuple[Any, ...] | None:
        with self._connect(collection) as conn:
            try:
                return conn.execute(_select_sql(query), query.params).fetchone()
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e

    def execute(self, collection: str, statement: str, params: Sequence[Any] = ()) -> int:
        with self._connect(collection) as conn:
            try:
                cursor = conn.execute(statement, params)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError(str(e)) from e
            return cursor.rowcount
