"""Configuration constants for ruling-search."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CollectionConfig:
    """A named document store backed by one SQLite file."""

    name: str
    filename: str
    aliases: tuple[str, ...] = ()
    # Only mutable collections accept imports and may be cleared.
    mutable: bool = False

    def matches(self, name: str) -> bool:
        return name == self.name or name in self.aliases


# Collections in scan order. Search results are concatenated in this order.
COLLECTIONS: tuple[CollectionConfig, ...] = (
    CollectionConfig("台州中院", "tz-2020.db", aliases=("台州中院 2020 前",)),
    CollectionConfig("温岭法院", "wl-2020.db", aliases=("温岭法院 2020 前",)),
    CollectionConfig("已导入数据", "user_imported.db", mutable=True),
)

# Table holding the rulings in every collection database.
DOCUMENTS_TABLE: str = "documents"

# Environment variable overriding the data directory.
DATA_DIR_ENV: str = "RULING_SEARCH_DATA_DIR"

# Directory with collection databases. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/ruling-search").expanduser(),
    Path("~/.ruling-search").expanduser(),
    Path("data"),
]

# Uploaded files are staged here (relative to the data directory) while being extracted.
UPLOAD_DIR_NAME: str = "uploads"
ALLOWED_UPLOAD_SUFFIXES: frozenset[str] = frozenset({".doc", ".docx"})

# Best-effort text extraction limits.
EXTRACT_MAX_FILE_SIZE: int = 50 * 1024
EXTRACT_MAX_LINES: int = 100
EXTRACT_MAX_CHARS: int = 1000

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8081


def resolve_data_directory() -> Path:
    """Return the data directory: the env override, else the first existing candidate."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
