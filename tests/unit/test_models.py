"""Tests for request parsing and document serialisation."""

import pytest

from ruling_search.models.document import Category, Document, PositionalId, SearchScope, StableId
from ruling_search.models.search import parse_search_request


def test_parse_splits_keywords_on_whitespace() -> None:
    request = parse_search_request(" 甲  乙\t丙 ", exclude="撤诉 驳回")
    assert request.keywords == ("甲", "乙", "丙")
    assert request.exclude == ("撤诉", "驳回")


def test_parse_defaults() -> None:
    request = parse_search_request()
    assert request.scope == SearchScope.CONTENT
    assert request.category is None
    assert request.source is None


def test_parse_all_sentinels_mean_unfiltered() -> None:
    request = parse_search_request(category="全部", source="全部")
    assert request.category is None
    assert request.source is None
    assert parse_search_request(category="all", source="").category is None


def test_parse_scope_aliases() -> None:
    assert parse_search_request(scope="both").scope == SearchScope.ALL
    assert parse_search_request(scope="TITLE").scope == SearchScope.TITLE
    with pytest.raises(ValueError, match="Invalid search scope"):
        parse_search_request(scope="everything")


def test_document_to_dict_uses_wire_names() -> None:
    doc = Document(PositionalId("已导入数据", 3, 1), "标题", "内容", "已导入数据", Category.CIVIL)
    assert doc.to_dict() == {
        "id": 3,
        "title": "标题",
        "content": "内容",
        "source": "已导入数据",
        "type": "民事",
    }
    assert Document(StableId(9), "", "", "台州中院", Category.OTHER).id == 9
