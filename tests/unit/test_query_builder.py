"""Tests for search query construction and its matching semantics."""

from pathlib import Path

import pytest

from ruling_search.core.search.query_builder import (
    build_enumeration_query,
    build_id_lookup_query,
    build_search_query,
)
from ruling_search.core.store.sqlite_store import SqliteCollectionStore
from ruling_search.models.document import CollectionSchema, SearchScope
from ruling_search.models.search import SearchRequest
from tests.unit.fakes import write_collection

WITH_ID = CollectionSchema(name="tz", columns=("id", "title", "content"))
WITHOUT_ID = CollectionSchema(name="user", columns=("title", "content"))


def test_empty_request_selects_all_rows() -> None:
    query = build_search_query(WITH_ID, SearchRequest())
    assert query.where == "1=1"
    assert query.params == ()
    assert query.columns == ("id", "title", "content")
    assert query.order_by is None


def test_identifier_less_schema_is_ordered_by_rowid() -> None:
    query = build_search_query(WITHOUT_ID, SearchRequest())
    assert query.columns == ("title", "content")
    assert query.order_by == "rowid"


def test_keyword_groups_are_or_across_scope_and_and_across_keywords() -> None:
    request = SearchRequest(keywords=("甲", "乙"), scope=SearchScope.ALL)
    query = build_search_query(WITH_ID, request)
    assert query.where == (
        "((instr(title, ?) > 0 OR instr(content, ?) > 0)"
        " AND (instr(title, ?) > 0 OR instr(content, ?) > 0))"
    )
    assert query.params == ("甲", "甲", "乙", "乙")


def test_excluded_keywords_negate_every_scope_column() -> None:
    request = SearchRequest(exclude=("撤诉",), scope=SearchScope.ALL)
    query = build_search_query(WITH_ID, request)
    assert query.where == "instr(title, ?) = 0 AND instr(content, ?) = 0"
    assert query.params == ("撤诉", "撤诉")


def test_category_filter_uses_title_marker() -> None:
    query = build_search_query(WITH_ID, SearchRequest(category="刑事"))
    assert query.where == "instr(title, ?) > 0"
    assert query.params == ("刑",)


def test_unknown_category_is_matched_literally() -> None:
    query = build_search_query(WITH_ID, SearchRequest(category="行政"))
    assert query.params == ("行政",)


def test_enumeration_query_has_no_filter() -> None:
    query = build_enumeration_query(WITHOUT_ID)
    assert query.where == "1=1"
    assert query.order_by == "rowid"


def test_id_lookup_requires_id_column() -> None:
    assert build_id_lookup_query(WITH_ID, 3).params == (3,)
    with pytest.raises(ValueError, match="no id column"):
        build_id_lookup_query(WITHOUT_ID, 3)


# --- Matching semantics against SQLite ---

ROWS = [
    (1, "合同纠纷", "甲方与乙方"),
    (2, "合同纠纷", "甲方与丙方"),
    (3, "撤诉裁定", "甲方与乙方"),
    (4, "Case ABC", "100% done_here"),
]


@pytest.fixture
def store(tmp_path: Path) -> SqliteCollectionStore:
    path = tmp_path / "tz.db"
    write_collection(path, ROWS, with_id=True)
    return SqliteCollectionStore({"tz": path})


def _ids(store: SqliteCollectionStore, request: SearchRequest) -> list[int]:
    return [row[0] for row in store.query("tz", build_search_query(WITH_ID, request))]


def test_all_keywords_required(store: SqliteCollectionStore) -> None:
    request = SearchRequest(keywords=("甲", "乙"), scope=SearchScope.ALL)
    assert _ids(store, request) == [1, 3]


def test_any_excluded_keyword_removes_row(store: SqliteCollectionStore) -> None:
    request = SearchRequest(keywords=("甲", "乙"), exclude=("撤诉",), scope=SearchScope.ALL)
    assert _ids(store, request) == [1]


def test_scope_limits_columns(store: SqliteCollectionStore) -> None:
    assert _ids(store, SearchRequest(keywords=("甲",), scope=SearchScope.TITLE)) == []
    assert _ids(store, SearchRequest(keywords=("合同",), scope=SearchScope.TITLE)) == [1, 2]


def test_matching_is_case_sensitive(store: SqliteCollectionStore) -> None:
    assert _ids(store, SearchRequest(keywords=("ABC",), scope=SearchScope.TITLE)) == [4]
    assert _ids(store, SearchRequest(keywords=("abc",), scope=SearchScope.TITLE)) == []


def test_wildcard_characters_are_literal(store: SqliteCollectionStore) -> None:
    assert _ids(store, SearchRequest(keywords=("%",))) == [4]
    assert _ids(store, SearchRequest(keywords=("_h",))) == [4]
    assert _ids(store, SearchRequest(keywords=("0%d",))) == []
