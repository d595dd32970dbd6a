"""Best-effort title and text extraction from uploaded ruling files.

The file name becomes the title. Content is whatever text can be read
from the raw bytes; binary Word files yield mostly noise, which is accepted.
"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ruling_search.config import EXTRACT_MAX_CHARS, EXTRACT_MAX_FILE_SIZE, EXTRACT_MAX_LINES

TRUNCATION_SUFFIX = "... (内容已截断)"


@dataclass(frozen=True)
class ExtractedDocument:
    """Title and text pulled from a file."""

    title: str
    content: str


def _read_head_lines(path: Path) -> str:
    lines: list[str] = []
    with open(path, encoding="utf-8", errors="replace") as f:
        for line in f:
            if len(lines) >= EXTRACT_MAX_LINES:
                break
            lines.append(line.rstrip("\r\n") + "\n")
    return "".join(lines)


def _read_content(path: Path) -> str:
    if path.stat().st_size > EXTRACT_MAX_FILE_SIZE:
        return _read_head_lines(path)

    text = path.read_bytes().decode("utf-8", errors="replace")
    if len(text) > EXTRACT_MAX_CHARS:
        text = text[:EXTRACT_MAX_CHARS] + TRUNCATION_SUFFIX
    return text


def extract_document(path: Path, *, title: str | None = None) -> ExtractedDocument:
    """Extract a title and content from a file.

    Args:
        path: File to read.
        title: Title to use instead of the file stem.

    Returns:
        ExtractedDocument. Unreadable files get a placeholder content.
    """
    title = title if title is not None else path.stem
    try:
        content = _read_content(path)
    except OSError:
        logger.warning("Could not read {}, storing placeholder content", path, exc_info=True)
        content = f"从 {title} 导入的文档内容"
    return ExtractedDocument(title=title, content=content)
