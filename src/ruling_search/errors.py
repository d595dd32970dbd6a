"""Exceptions raised by the ruling search engine."""


class RulingSearchError(Exception):
    """Base class for all ruling search errors."""


class StoreError(RulingSearchError):
    """A collection store could not complete an operation."""


class CollectionError(RulingSearchError):
    """An operation on a specific collection failed."""

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(f"{collection}: {message}")
        self.collection = collection


class SchemaIntrospectionError(CollectionError):
    """The collection's columns could not be read (store unreachable or table missing)."""


class QueryExecutionError(CollectionError):
    """The search or lookup query failed against the collection."""


class DocumentNotFoundError(RulingSearchError):
    """No document exists for the requested collection and id."""


class InvalidIdError(RulingSearchError):
    """A document id is not an integer."""


class UnknownCollectionError(RulingSearchError):
    """A collection name does not match any configured collection."""


class ReadOnlyCollectionError(RulingSearchError):
    """A mutation was attempted on a reference collection."""


class UnsupportedFileTypeError(RulingSearchError):
    """An uploaded file does not have an accepted extension."""
