"""Import rulings into, and clear, the mutable collection."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ruling_search.config import ALLOWED_UPLOAD_SUFFIXES, DOCUMENTS_TABLE, CollectionConfig
from ruling_search.core.importer.extractor import extract_document
from ruling_search.core.search.identity_cache import IdentityCache
from ruling_search.core.search.searcher import find_collection
from ruling_search.errors import (
    QueryExecutionError,
    ReadOnlyCollectionError,
    StoreError,
    UnsupportedFileTypeError,
)
from ruling_search.protocols import CollectionStoreProtocol


@dataclass(frozen=True)
class ImportStats:
    """Summary of an import operation."""

    documents_imported: int
    documents_skipped: int


def writable_collection(collections: Sequence[CollectionConfig], name: str) -> CollectionConfig:
    """Return the named collection, which must accept mutations."""
    config = find_collection(collections, name)
    if not config.mutable:
        msg = f"Collection {config.name!r} is read-only"
        raise ReadOnlyCollectionError(msg)
    return config


def check_upload_name(filename: str) -> str:
    """Return the title for an uploaded file name (its stem).

    Raises:
        UnsupportedFileTypeError: If the extension is not accepted.
    """
    path = Path(filename)
    if path.suffix.lower() not in ALLOWED_UPLOAD_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_UPLOAD_SUFFIXES))
        msg = f"Unsupported file type {path.suffix!r}, only {allowed} are accepted"
        raise UnsupportedFileTypeError(msg)
    return path.stem


def import_document(
    store: CollectionStoreProtocol, collection: str, *, title: str, content: str
) -> None:
    """Append one ruling to the collection.

    Existing rows keep their positions, so cached positional ids stay valid.
    """
    try:
        store.execute(
            collection,
            f"INSERT INTO {DOCUMENTS_TABLE} (title, content) VALUES (?, ?)",
            (title, content),
        )
    except StoreError as e:
        raise QueryExecutionError(collection, f"insert failed: {e}") from e
    logger.info("Document {!r} saved to {}", title, collection)


def import_file(
    store: CollectionStoreProtocol,
    collection: str,
    path: Path,
    *,
    title: str | None = None,
) -> str:
    """Extract a .doc/.docx file and store it. Returns the stored title."""
    default_title = check_upload_name(path.name)
    extracted = extract_document(path, title=title if title is not None else default_title)
    logger.debug(
        "Extracted {} as {!r}, content length {}",
        path.name,
        extracted.title,
        len(extracted.content),
    )
    import_document(store, collection, title=extracted.title, content=extracted.content)
    return extracted.title


def import_files(
    store: CollectionStoreProtocol, collection: str, paths: Sequence[Path]
) -> ImportStats:
    """Import several files, skipping unsupported or missing ones."""
    imported = 0
    skipped = 0
    for path in paths:
        if not path.is_file():
            logger.warning("Skipping {}: not a file", path)
            skipped += 1
            continue
        try:
            import_file(store, collection, path)
        except UnsupportedFileTypeError as e:
            logger.warning("Skipping {}: {}", path.name, e)
            skipped += 1
            continue
        imported += 1

    logger.info("Import complete: {} imported, {} skipped", imported, skipped)
    return ImportStats(documents_imported=imported, documents_skipped=skipped)


def clear_collection(
    store: CollectionStoreProtocol, cache: IdentityCache, collection: str
) -> int:
    """Delete every ruling in the collection and invalidate all positional ids.

    Returns:
        Number of deleted rows.
    """
    logger.info("Clearing collection {}", collection)
    try:
        deleted = store.execute(collection, f"DELETE FROM {DOCUMENTS_TABLE}")
    except StoreError as e:
        logger.error("Clearing {} failed: {}", collection, e)
        raise QueryExecutionError(collection, f"clear failed: {e}") from e
    cache.clear()
    logger.info("Collection {} cleared ({} rows)", collection, deleted)
    return deleted
