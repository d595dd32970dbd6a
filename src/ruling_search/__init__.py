"""Keyword search over court ruling collections."""

from ruling_search.context import SearchContext, open_context
from ruling_search.core.search.identity_cache import IdentityCache
from ruling_search.core.store.sqlite_store import SqliteCollectionStore
from ruling_search.protocols import CollectionStoreProtocol

__all__ = [
    "CollectionStoreProtocol",
    "IdentityCache",
    "SearchContext",
    "SqliteCollectionStore",
    "open_context",
]
