"""Tests for best-effort text extraction."""

from pathlib import Path

from ruling_search.config import EXTRACT_MAX_CHARS, EXTRACT_MAX_LINES
from ruling_search.core.importer.extractor import TRUNCATION_SUFFIX, extract_document


def test_title_is_file_stem(tmp_path: Path) -> None:
    path = tmp_path / "张三盗窃案.docx"
    path.write_text("内容", encoding="utf-8")
    doc = extract_document(path)
    assert doc.title == "张三盗窃案"
    assert doc.content == "内容"


def test_explicit_title_overrides_stem(tmp_path: Path) -> None:
    path = tmp_path / "123-upload.doc"
    path.write_text("x", encoding="utf-8")
    assert extract_document(path, title="原始文件名").title == "原始文件名"


def test_long_small_file_is_truncated(tmp_path: Path) -> None:
    path = tmp_path / "a.doc"
    path.write_text("字" * (EXTRACT_MAX_CHARS + 50), encoding="utf-8")
    doc = extract_document(path)
    assert doc.content == "字" * EXTRACT_MAX_CHARS + TRUNCATION_SUFFIX


def test_large_file_keeps_first_lines(tmp_path: Path) -> None:
    path = tmp_path / "big.doc"
    line = "x" * 1000
    path.write_text("\n".join([line] * (EXTRACT_MAX_LINES + 20)), encoding="utf-8")
    doc = extract_document(path)
    assert doc.content.count("\n") == EXTRACT_MAX_LINES


def test_undecodable_bytes_are_replaced(tmp_path: Path) -> None:
    path = tmp_path / "bin.doc"
    path.write_bytes(b"\xd0\xcf\x11\xe0abc")
    assert "abc" in extract_document(path).content


def test_unreadable_file_gets_placeholder(tmp_path: Path) -> None:
    doc = extract_document(tmp_path / "missing.doc")
    assert doc.title == "missing"
    assert doc.content == "从 missing 导入的文档内容"
