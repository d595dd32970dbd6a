"""Domain models for ruling search."""

from ruling_search.models.document import (
    Category,
    CollectionSchema,
    Document,
    DocumentId,
    PositionalId,
    RetrievedDocument,
    SearchScope,
    StableId,
)
from ruling_search.models.search import SearchRequest, parse_search_request

__all__ = [
    "Category",
    "CollectionSchema",
    "Document",
    "DocumentId",
    "PositionalId",
    "RetrievedDocument",
    "SearchRequest",
    "SearchScope",
    "StableId",
    "parse_search_request",
]
