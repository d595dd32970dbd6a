"""Wiring of collection store, identity cache and configured collections."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from ruling_search.config import COLLECTIONS, CollectionConfig, resolve_data_directory
from ruling_search.core.database.schema import ensure_database
from ruling_search.core.importer.loader import clear_collection, import_file, writable_collection
from ruling_search.core.search.identity_cache import IdentityCache
from ruling_search.core.search.retrieval import enumerate_collection, get_document
from ruling_search.core.search.schema import introspect_collection
from ruling_search.core.search.searcher import find_collection, search_documents
from ruling_search.core.store.sqlite_store import SqliteCollectionStore
from ruling_search.errors import RulingSearchError
from ruling_search.models.document import Document, RetrievedDocument
from ruling_search.models.search import SearchRequest
from ruling_search.protocols import CollectionStoreProtocol


@dataclass
class SearchContext:
    """Shared resources for the lifetime of a server or CLI invocation."""

    store: CollectionStoreProtocol
    collections: tuple[CollectionConfig, ...]
    data_dir: Path | None = None
    cache: IdentityCache = field(default_factory=IdentityCache)

    @property
    def default_writable(self) -> CollectionConfig:
        """The first mutable collection; target of uploads and clears."""
        for config in self.collections:
            if config.mutable:
                return config
        msg = "No mutable collection configured"
        raise RulingSearchError(msg)

    def search(self, request: SearchRequest) -> list[Document]:
        return search_documents(self.store, self.cache, request, collections=self.collections)

    def get_document(
        self, collection: str, document_id: str | int, query: str | None = None
    ) -> RetrievedDocument:
        return get_document(
            self.store,
            self.cache,
            collection=collection,
            document_id=document_id,
            query=query,
            collections=self.collections,
        )

    def list_documents(self, collection: str) -> list[Document]:
        config = find_collection(self.collections, collection)
        return enumerate_collection(self.store, config.name)

    def import_file(
        self, path: Path, *, title: str | None = None, collection: str | None = None
    ) -> str:
        config = (
            writable_collection(self.collections, collection)
            if collection
            else self.default_writable
        )
        return import_file(self.store, config.name, path, title=title)

    def clear(self, collection: str | None = None) -> int:
        config = (
            writable_collection(self.collections, collection)
            if collection
            else self.default_writable
        )
        return clear_collection(self.store, self.cache, config.name)

    def describe_collections(self) -> list[dict[str, object]]:
        """Describe each collection; unreachable ones report their error."""
        described: list[dict[str, object]] = []
        for config in self.collections:
            entry: dict[str, object] = {
                "name": config.name,
                "aliases": list(config.aliases),
                "mutable": config.mutable,
            }
            try:
                schema = introspect_collection(self.store, config.name)
                entry["has_stable_id"] = schema.has_stable_id
            except RulingSearchError as e:
                entry["error"] = str(e)
            described.append(entry)
        return described


def open_context(
    data_dir: Path | None = None,
    *,
    collections: Sequence[CollectionConfig] = COLLECTIONS,
) -> SearchContext:
    """Build a context over the SQLite files in ``data_dir``.

    Mutable collections get their database and table created on first use.
    """
    root = data_dir or resolve_data_directory()
    paths = {c.name: root / c.filename for c in collections}
    writable = [c.name for c in collections if c.mutable]
    for name in writable:
        ensure_database(paths[name])
    logger.debug("Opened collections in {}: {}", root, ", ".join(paths))
    return SearchContext(
        store=SqliteCollectionStore(paths, writable=writable),
        collections=tuple(collections),
        data_dir=root,
    )
