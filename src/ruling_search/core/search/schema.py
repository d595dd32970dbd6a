"""Discover which columns a collection exposes."""

from loguru import logger

from ruling_search.errors import SchemaIntrospectionError, StoreError
from ruling_search.models.document import CollectionSchema
from ruling_search.protocols import CollectionStoreProtocol


def introspect_collection(store: CollectionStoreProtocol, collection: str) -> CollectionSchema:
    """Return the collection's schema.

    Raises:
        SchemaIntrospectionError: If the store fails or the documents table is missing.
    """
    try:
        columns = store.list_columns(collection)
    except StoreError as e:
        logger.error("Error getting table columns for {}: {}", collection, e)
        raise SchemaIntrospectionError(collection, f"cannot read table structure: {e}") from e

    if not columns:
        raise SchemaIntrospectionError(collection, "documents table not found")

    schema = CollectionSchema(name=collection, columns=tuple(columns))
    logger.debug("Collection {} has id column: {}", collection, schema.has_stable_id)
    return schema
