"""Resolve a single ruling by collection and id."""

from collections.abc import Sequence

from loguru import logger

from ruling_search.config import CollectionConfig
from ruling_search.core.search.identity_cache import IdentityCache
from ruling_search.core.search.query_builder import (
    build_enumeration_query,
    build_id_lookup_query,
)
from ruling_search.core.search.schema import introspect_collection
from ruling_search.core.search.searcher import decode_row, find_collection, run_query
from ruling_search.errors import (
    DocumentNotFoundError,
    InvalidIdError,
    QueryExecutionError,
    StoreError,
)
from ruling_search.models.document import CollectionSchema, Document, RetrievedDocument
from ruling_search.protocols import CollectionStoreProtocol


def _parse_id(document_id: str | int) -> int:
    try:
        return int(document_id)
    except (TypeError, ValueError):
        msg = f"Invalid ID format: {document_id!r}"
        raise InvalidIdError(msg) from None


def enumerate_collection(
    store: CollectionStoreProtocol, collection: str, *, epoch: int = 0
) -> list[Document]:
    """Return every document in the collection in row order.

    Documents of identifier-less collections are numbered from 1, the same
    numbering a search without filters would assign.
    """
    schema = introspect_collection(store, collection)
    return run_query(store, schema, build_enumeration_query(schema), epoch=epoch)


def _lookup_by_id(
    store: CollectionStoreProtocol, schema: CollectionSchema, document_id: int
) -> Document:
    query = build_id_lookup_query(schema, document_id)
    try:
        row = store.query_one(schema.name, query)
    except StoreError as e:
        logger.error("Error querying document {} from {}: {}", document_id, schema.name, e)
        raise QueryExecutionError(schema.name, f"lookup failed: {e}") from e
    if row is None:
        msg = f"Document {document_id} not found in {schema.name}"
        raise DocumentNotFoundError(msg)
    return decode_row(row, schema=schema, position=0, epoch=0)


def _lookup_by_position(
    store: CollectionStoreProtocol,
    cache: IdentityCache,
    schema: CollectionSchema,
    position: int,
) -> Document:
    # Full scan; only reached when the cache has no entry for this position.
    epoch = cache.epoch
    documents = run_query(store, schema, build_enumeration_query(schema), epoch=epoch)
    if position <= 0 or position > len(documents):
        logger.info(
            "Invalid row number {} (total documents: {}) in {}",
            position,
            len(documents),
            schema.name,
        )
        msg = f"Document {position} not found in {schema.name}"
        raise DocumentNotFoundError(msg)
    document = documents[position - 1]
    cache.put(document)
    return document


def get_document(
    store: CollectionStoreProtocol,
    cache: IdentityCache,
    *,
    collection: str,
    document_id: str | int,
    query: str | None = None,
    collections: Sequence[CollectionConfig],
) -> RetrievedDocument:
    """Resolve one document.

    Checks the identity cache first. On a miss, collections with an id
    column are looked up directly; others are enumerated in full and the id
    is used as a 1-based position, re-populating the cache on success.

    Args:
        store: Collection store.
        cache: Identity cache shared with search.
        collection: Collection name or alias.
        document_id: Stable or positional id.
        query: Search term echoed back for highlighting.
        collections: Configured collections.

    Raises:
        UnknownCollectionError: If the collection is not configured.
        InvalidIdError: If the id is not an integer.
        DocumentNotFoundError: If no document matches.
    """
    config = find_collection(collections, collection)
    number = _parse_id(document_id)
    logger.info("Getting document with ID: {} from source: {}", number, config.name)

    cached = cache.get(config.name, number)
    if cached is not None:
        logger.debug("Found document in cache: {}/{}", config.name, number)
        return RetrievedDocument(document=cached, query=query)

    schema = introspect_collection(store, config.name)
    if schema.has_stable_id:
        document = _lookup_by_id(store, schema, number)
    else:
        document = _lookup_by_position(store, cache, schema, number)

    logger.debug("Retrieved document: {}", document.title)
    return RetrievedDocument(document=document, query=query)
