"""Tests for MCP tool core functions."""

from pathlib import Path

from ruling_search.context import SearchContext
from ruling_search.mcp.server import ruling_get_document, ruling_list_collections, ruling_search


def test_ruling_search_returns_results_with_metadata(context: SearchContext) -> None:
    result = ruling_search(context, query="被告人")
    assert result["count"] == 2
    assert result["total"] == 2
    assert result["has_more"] is False
    first = result["results"][0]
    assert set(first) == {"id", "title", "content", "source", "type"}
    assert first["source"] == "台州中院"


def test_ruling_search_paginates(context: SearchContext) -> None:
    result = ruling_search(context, limit=2)
    assert result["count"] == 2
    assert result["total"] == 6
    assert result["has_more"] is True
    assert result["next_offset"] == 2

    last = ruling_search(context, limit=2, offset=4)
    assert last["count"] == 2
    assert last["has_more"] is False
    assert "next_offset" not in last


def test_ruling_search_concise_truncates_content(context: SearchContext, tmp_path: Path) -> None:
    path = tmp_path / "长文.docx"
    path.write_text("判" * 300, encoding="utf-8")
    context.import_file(path)

    concise = ruling_search(context, query="判判判", source="已导入数据")
    detailed = ruling_search(
        context, query="判判判", source="已导入数据", response_format="detailed"
    )
    assert len(concise["results"][0]["content"]) == 120
    assert len(detailed["results"][0]["content"]) == 300


def test_ruling_search_filters_category_and_scope(context: SearchContext) -> None:
    result = ruling_search(context, query="张三", scope="title", category="刑事")
    titles = [r["title"] for r in result["results"]]
    assert titles == ["张三盗窃刑事判决书", "张三刑事案"]


def test_ruling_search_reports_bad_input(context: SearchContext) -> None:
    assert "error" in ruling_search(context, scope="everywhere")
    assert "error" in ruling_search(context, source="杭州中院")


def test_ruling_get_document_roundtrip(context: SearchContext) -> None:
    found = ruling_search(context, query="丙方", source="已导入数据")
    hit = found["results"][0]

    result = ruling_get_document(
        context, source=hit["source"], document_id=str(hit["id"]), query="丙方"
    )
    assert result["title"] == "张三刑事案"
    assert result["type"] == "刑事"
    assert result["query"] == "丙方"


def test_ruling_get_document_errors(context: SearchContext) -> None:
    assert "error" in ruling_get_document(context, source="台州中院", document_id="99")
    assert "error" in ruling_get_document(context, source="台州中院", document_id="x")


def test_ruling_list_collections(context: SearchContext) -> None:
    result = ruling_list_collections(context)
    assert result["count"] == 3
    by_name = {c["name"]: c for c in result["collections"]}
    assert by_name["台州中院"]["has_stable_id"] is True
    assert by_name["已导入数据"]["has_stable_id"] is False
    assert by_name["已导入数据"]["mutable"] is True


def test_ruling_search_treats_negative_offset_as_start(context: SearchContext) -> None:
    result = ruling_search(context, limit=2, offset=-3)
    assert [r["id"] for r in result["results"]] == [1, 2]
    assert result["has_more"] is True
    assert result["next_offset"] == 2
