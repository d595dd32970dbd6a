"""Session-scoped mapping from synthetic ids back to documents."""

import threading

from ruling_search.models.document import Document, PositionalId


class IdentityCache:
    """Remembers documents of identifier-less collections by (collection, position).

    Every ``clear`` starts a new epoch; entries carry the epoch they were
    issued in and are only returned while that epoch is current. All access
    goes through a single lock, shared by concurrent requests.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, int], Document] = {}
        self._epoch = 0

    @property
    def epoch(self) -> int:
        with self._lock:
            return self._epoch

    def clear(self) -> int:
        """Drop all entries and return the new epoch."""
        with self._lock:
            self._entries = {}
            self._epoch += 1
            return self._epoch

    def put(self, document: Document) -> None:
        """Register a document under its positional id."""
        identity = document.identity
        if not isinstance(identity, PositionalId):
            msg = f"Only positional documents are cached, got {identity!r}"
            raise TypeError(msg)
        with self._lock:
            if identity.epoch != self._epoch:
                return
            self._entries[(identity.collection, identity.position)] = document

    def get(self, collection: str, position: int) -> Document | None:
        """Return the cached document, or None if missing or from an older epoch."""
        with self._lock:
            document = self._entries.get((collection, position))
            if document is None:
                return None
            identity = document.identity
            if not isinstance(identity, PositionalId) or identity.epoch != self._epoch:
                return None
            return document

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
