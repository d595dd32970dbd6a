"""Domain models for court ruling search."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Coarse case category derived from a ruling's title."""

    CRIMINAL = "刑事"
    CIVIL = "民事"
    OTHER = "其他"


class SearchScope(str, Enum):
    """Which text fields a keyword is matched against."""

    TITLE = "title"
    CONTENT = "content"
    ALL = "all"

    @property
    def columns(self) -> tuple[str, ...]:
        if self is SearchScope.TITLE:
            return ("title",)
        if self is SearchScope.CONTENT:
            return ("content",)
        return ("title", "content")


@dataclass(frozen=True)
class StableId:
    """Identifier read from a collection's own ``id`` column."""

    value: int


@dataclass(frozen=True)
class PositionalId:
    """Synthetic 1-based position of a row within one search pass.

    Only meaningful inside ``collection`` and while the identity cache is
    still at ``epoch``.
    """

    collection: str
    position: int
    epoch: int

    @property
    def value(self) -> int:
        return self.position


DocumentId = StableId | PositionalId


@dataclass(frozen=True)
class Document:
    """A single court ruling as returned by search or retrieval."""

    identity: DocumentId
    title: str
    content: str
    source: str
    category: Category

    @property
    def id(self) -> int:
        return self.identity.value

    def to_dict(self) -> dict[str, str | int]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "source": self.source,
            "type": self.category.value,
        }


@dataclass(frozen=True)
class RetrievedDocument:
    """A resolved document plus the caller's search term, echoed for highlighting."""

    document: Document
    query: str | None = None

    def to_dict(self) -> dict[str, str | int | None]:
        return {**self.document.to_dict(), "query": self.query}


@dataclass(frozen=True)
class CollectionSchema:
    """Columns discovered for one collection."""

    name: str
    columns: tuple[str, ...]

    @property
    def has_stable_id(self) -> bool:
        return "id" in self.columns
