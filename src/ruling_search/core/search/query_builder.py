"""Translate search requests into parameterised SQLite queries.

Keyword matching uses ``instr`` rather than ``LIKE``: it is case-sensitive and
treats ``%`` and ``_`` literally, so a keyword matches exactly when it is a
substring of the column text.
"""

from dataclasses import dataclass, field
from typing import Any

from ruling_search.core.search.classifier import category_marker
from ruling_search.models.document import CollectionSchema
from ruling_search.models.search import SearchRequest


@dataclass(frozen=True)
class Query:
    """A select against a collection's documents table."""

    columns: tuple[str, ...]
    where: str = "1=1"
    params: tuple[Any, ...] = field(default_factory=tuple)
    order_by: str | None = None


def _select_columns(schema: CollectionSchema) -> tuple[str, ...]:
    if schema.has_stable_id:
        return ("id", "title", "content")
    return ("title", "content")


def _order_by(schema: CollectionSchema) -> str | None:
    # Positional ids depend on a stable row order.
    return None if schema.has_stable_id else "rowid"


def build_search_query(schema: CollectionSchema, request: SearchRequest) -> Query:
    """Build the filtered query for one collection.

    Args:
        schema: Introspected schema of the collection.
        request: The search request.

    Returns:
        Query whose ``where`` clause ANDs together: one OR-group per required
        keyword, one negation per excluded keyword and scope column, and the
        approximate category filter on the title.
    """
    where_clauses: list[str] = []
    params: list[Any] = []
    columns = request.scope.columns

    keyword_groups: list[str] = []
    for keyword in request.keywords:
        keyword_groups.append(
            "(" + " OR ".join(f"instr({col}, ?) > 0" for col in columns) + ")"
        )
        params.extend([keyword] * len(columns))
    if keyword_groups:
        where_clauses.append("(" + " AND ".join(keyword_groups) + ")")

    for keyword in request.exclude:
        for col in columns:
            where_clauses.append(f"instr({col}, ?) = 0")
            params.append(keyword)

    if request.category is not None:
        where_clauses.append("instr(title, ?) > 0")
        params.append(category_marker(request.category))

    where_sql = " AND ".join(where_clauses) if where_clauses else "1=1"
    return Query(
        columns=_select_columns(schema),
        where=where_sql,
        params=tuple(params),
        order_by=_order_by(schema),
    )


def build_enumeration_query(schema: CollectionSchema) -> Query:
    """Build an unfiltered full scan of the collection."""
    return Query(columns=_select_columns(schema), order_by=_order_by(schema))


def build_id_lookup_query(schema: CollectionSchema, document_id: int) -> Query:
    """Build an exact-match lookup on the stable id column."""
    if not schema.has_stable_id:
        msg = f"Collection {schema.name!r} has no id column"
        raise ValueError(msg)
    return Query(columns=_select_columns(schema), where="id = ?", params=(document_id,))
