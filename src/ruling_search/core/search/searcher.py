"""Keyword search across all configured ruling collections."""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from ruling_search.config import CollectionConfig
from ruling_search.core.search.classifier import classify_title
from ruling_search.core.search.identity_cache import IdentityCache
from ruling_search.core.search.query_builder import Query, build_search_query
from ruling_search.core.search.schema import introspect_collection
from ruling_search.errors import QueryExecutionError, StoreError, UnknownCollectionError
from ruling_search.models.document import (
    CollectionSchema,
    Document,
    DocumentId,
    PositionalId,
    StableId,
)
from ruling_search.models.search import SearchRequest
from ruling_search.protocols import CollectionStoreProtocol


def resolve_collections(
    collections: Sequence[CollectionConfig], source: str | None
) -> list[CollectionConfig]:
    """Return the collections a request covers: all of them, or the one named by source."""
    if source is None:
        return list(collections)
    return [find_collection(collections, source)]


def find_collection(collections: Sequence[CollectionConfig], name: str) -> CollectionConfig:
    """Return the collection matching a name or alias."""
    for config in collections:
        if config.matches(name):
            return config
    msg = f"Unknown collection {name!r}"
    raise UnknownCollectionError(msg)


def decode_row(
    row: Sequence[Any], *, schema: CollectionSchema, position: int, epoch: int
) -> Document:
    """Turn a selected row into a Document.

    Rows from collections with an id column carry their own id; other rows get
    a positional id valid for ``epoch`` only.
    """
    identity: DocumentId
    if schema.has_stable_id:
        raw_id, title, content = row
        identity = StableId(int(raw_id))
    else:
        title, content = row
        identity = PositionalId(schema.name, position, epoch)
    title = title or ""
    return Document(
        identity=identity,
        title=title,
        content=content or "",
        source=schema.name,
        category=classify_title(title),
    )


def run_query(
    store: CollectionStoreProtocol,
    schema: CollectionSchema,
    query: Query,
    *,
    epoch: int,
) -> list[Document]:
    """Execute a query and decode every row in result order."""
    logger.debug(
        "Executing query in {}: WHERE {} with args: {}", schema.name, query.where, query.params
    )
    try:
        rows = store.query(schema.name, query)
    except StoreError as e:
        logger.error("Error querying {} database: {}", schema.name, e)
        raise QueryExecutionError(schema.name, f"query failed: {e}") from e

    documents: list[Document] = []
    for position, row in enumerate(rows, start=1):
        try:
            documents.append(decode_row(row, schema=schema, position=position, epoch=epoch))
        except (TypeError, ValueError) as e:
            # Only id-carrying rows can fail, so positional numbering is unaffected.
            logger.warning("Skipping undecodable row from {}: {}", schema.name, e)
    return documents


def search_collection(
    store: CollectionStoreProtocol,
    cache: IdentityCache,
    collection: str,
    request: SearchRequest,
    *,
    epoch: int,
) -> list[Document]:
    """Search one collection and register its positional documents in the cache."""
    schema = introspect_collection(store, collection)
    query = build_search_query(schema, request)
    documents = run_query(store, schema, query, epoch=epoch)
    if not schema.has_stable_id:
        for doc in documents:
            cache.put(doc)
    logger.debug("Found {} results in {} before type filtering", len(documents), collection)
    return documents


def search_documents(
    store: CollectionStoreProtocol,
    cache: IdentityCache,
    request: SearchRequest,
    *,
    collections: Sequence[CollectionConfig],
) -> list[Document]:
    """Search every collection in scope and return the merged results.

    Starts a new cache epoch, invalidating positional ids from earlier
    searches. Results keep collection scan order. When a category is
    requested, documents whose classified category differs are dropped, since
    the storage-layer filter only checks a title marker.

    Raises:
        UnknownCollectionError: If ``request.source`` names no collection.
        SchemaIntrospectionError: If any collection's schema cannot be read.
        QueryExecutionError: If any collection's query fails.
    """
    epoch = cache.clear()
    logger.info(
        "Search request - keywords: {}, exclude: {}, scope: {}, category: {}, source: {}",
        request.keywords,
        request.exclude,
        request.scope.value,
        request.category,
        request.source,
    )

    results: list[Document] = []
    for config in resolve_collections(collections, request.source):
        results.extend(search_collection(store, cache, config.name, request, epoch=epoch))

    if request.category is not None:
        results = [doc for doc in results if doc.category.value == request.category]

    logger.info("Search completed, found {} results", len(results))
    return results
