"""MCP server exposing ruling search and retrieval tools."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from ruling_search.context import SearchContext, open_context
from ruling_search.errors import (
    DocumentNotFoundError,
    InvalidIdError,
    RulingSearchError,
    UnknownCollectionError,
)
from ruling_search.models.search import parse_search_request

# --- Core functions (testable without MCP context) ---


def ruling_search(
    ctx: SearchContext,
    *,
    query: str = "",
    exclude: str = "",
    scope: str = "content",
    category: str | None = None,
    source: str | None = None,
    limit: int = 20,
    offset: int = 0,
    response_format: str = "concise",
) -> dict[str, Any]:
    """Search court rulings by keywords.

    Args:
        query: Space-separated keywords; all must appear.
        exclude: Space-separated keywords; rulings containing any are dropped.
        scope: "title", "content" or "all".
        category: "刑事", "民事", "其他" or None for all.
        source: Collection name, or None for all collections.
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        response_format: "concise" or "detailed".
    """
    limit = max(1, min(limit, 50))
    offset = max(0, offset)
    try:
        request = parse_search_request(
            query, exclude=exclude, scope=scope, category=category, source=source
        )
        documents = ctx.search(request)
    except (ValueError, RulingSearchError) as e:
        return {"error": str(e), "results": [], "count": 0, "total": 0}

    page = documents[offset : offset + limit]
    results = []
    for doc in page:
        entry = doc.to_dict()
        if response_format != "detailed":
            entry["content"] = doc.content[:120]
        results.append(entry)

    output: dict[str, Any] = {
        "results": results,
        "count": len(results),
        "total": len(documents),
        "has_more": offset + len(results) < len(documents),
    }
    if output["has_more"]:
        output["next_offset"] = offset + limit
    return output


def ruling_get_document(
    ctx: SearchContext,
    *,
    source: str,
    document_id: str,
    query: str | None = None,
) -> dict[str, Any]:
    """Read a full ruling by the id and source returned from search.

    Args:
        source: Collection name from the search result.
        document_id: Id from the search result.
        query: Search term to echo back for highlighting.
    """
    try:
        return ctx.get_document(source, document_id, query).to_dict()
    except (DocumentNotFoundError, InvalidIdError, UnknownCollectionError) as e:
        return {"error": str(e)}
    except RulingSearchError as e:
        logger.error("Retrieval failed: {}", e)
        return {"error": f"Database error: {e}"}


def ruling_list_collections(ctx: SearchContext) -> dict[str, Any]:
    """List the configured collections."""
    collections = ctx.describe_collections()
    return {"collections": collections, "count": len(collections)}


# --- MCP Server Setup ---


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[SearchContext]:
    """Open the collections on startup."""
    yield open_context()


mcp_server = FastMCP(
    "ruling-search",
    instructions="""\
Keyword search over court rulings (判决书) from several collections.

1. Search with ruling_search_tool. Keywords are ANDed and matched as exact,
   case-sensitive substrings.
2. Read a full ruling with ruling_get_document_tool, passing the id and
   source of a search result.

Ids from the imported collection (已导入数据) are positions in the latest
search; run the search again before reading if in doubt.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> SearchContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def ruling_search_tool(
    ctx: Context,
    query: str = "",
    exclude: str = "",
    scope: str = "content",
    category: str | None = None,
    source: str | None = None,
    limit: int = 20,
    offset: int = 0,
    response_format: str = "concise",
) -> dict[str, Any]:
    """Search court rulings by keywords.

    All keywords in query must appear in the selected scope; any keyword in
    exclude removes the ruling. Matching is exact substring, case-sensitive.

    Pagination: When has_more is true, use next_offset in a follow-up call.

    Args:
        query: Space-separated keywords.
        exclude: Space-separated keywords to exclude.
        scope: "title", "content" or "all".
        category: "刑事", "民事" or "其他".
        source: Collection name (see ruling_list_collections_tool).
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        response_format: "concise" or "detailed".
    """
    return ruling_search(
        _ctx(ctx),
        query=query,
        exclude=exclude,
        scope=scope,
        category=category,
        source=source,
        limit=limit,
        offset=offset,
        response_format=response_format,
    )


@mcp_server.tool()
async def ruling_get_document_tool(
    ctx: Context,
    source: str,
    document_id: str,
    query: str | None = None,
) -> dict[str, Any]:
    """Read the full text of a ruling found via ruling_search_tool.

    Args:
        source: The result's source collection.
        document_id: The result's id.
        query: Search term, echoed back.
    """
    return ruling_get_document(_ctx(ctx), source=source, document_id=document_id, query=query)


@mcp_server.tool()
async def ruling_list_collections_tool(ctx: Context) -> dict[str, Any]:
    """List the ruling collections available for search."""
    return ruling_list_collections(_ctx(ctx))


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from ruling_search.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
