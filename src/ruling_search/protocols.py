"""Protocols for dependency injection in the search engine."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from ruling_search.core.search.query_builder import Query


@runtime_checkable
class CollectionStoreProtocol(Protocol):
    """Protocol for stores holding one ``documents`` table per collection.

    Implementations raise ``StoreError`` on any failure.
    """

    def list_columns(self, collection: str) -> list[str]:
        """Return the column names of the collection's documents table."""
        ...

    def query(self, collection: str, query: Query) -> list[tuple[Any, ...]]:
        """Run a select and return all rows."""
        ...

    def query_one(self, collection: str, query: Query) -> tuple[Any, ...] | None:
        """Run a select and return the first row, or None."""
        ...

    def execute(self, collection: str, statement: str, params: Sequence[Any] = ()) -> int:
        """Run a mutating statement and return the affected row count."""
        ...
