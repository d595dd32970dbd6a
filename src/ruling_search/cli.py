"""CLI for ruling-search (search, show, import, clear, servers)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from ruling_search.config import DEFAULT_HOST, DEFAULT_PORT
from ruling_search.context import SearchContext, open_context
from ruling_search.errors import DocumentNotFoundError, RulingSearchError
from ruling_search.logging_config import configure_logging
from ruling_search.models.search import parse_search_request

app = typer.Typer(help="Keyword search over court ruling collections.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory with the collection databases"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open(data_dir: Path | None) -> SearchContext:
    if data_dir is not None and not data_dir.is_dir():
        logger.error("Data directory not found: {}", data_dir)
        raise typer.Exit(1)
    return open_context(data_dir)


@app.command()
def search(
    keywords: Annotated[list[str] | None, typer.Argument(help="Keywords, all required")] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-x", help="Keyword to exclude (repeatable)"),
    ] = None,
    scope: str = typer.Option("content", "--scope", "-s", help="title, content or all"),
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="刑事, 民事 or 其他")
    ] = None,
    source: Annotated[
        str | None, typer.Option("--source", "-S", help="Restrict to one collection")
    ] = None,
    limit: int = typer.Option(20, "--limit", "-n", help="Max results to print"),
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search rulings whose text contains every keyword."""
    ctx = _open(data_dir)
    try:
        request = parse_search_request(
            " ".join(keywords or []),
            exclude=" ".join(exclude or []),
            scope=scope,
            category=category,
            source=source,
        )
        results = ctx.search(request)
    except (ValueError, RulingSearchError) as e:
        typer.echo(f"Search failed: {e}", err=True)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps([d.to_dict() for d in results], ensure_ascii=False, indent=2))
        return

    typer.echo(f"Found {len(results)} results (showing {min(limit, len(results))}):\n")
    for doc in results[:limit]:
        typer.echo(f"  [{doc.source}] [{doc.category.value}] {doc.title[:80]}")
        typer.echo(f"    id={doc.id}  {doc.content[:60]!r}")
        typer.echo()


@app.command()
def show(
    document_id: str = typer.Argument(..., help="Document id from search results"),
    source: str = typer.Option(..., "--source", "-S", help="Collection of the document"),
    query: Annotated[
        str | None, typer.Option("--query", "-q", help="Search term to echo back")
    ] = None,
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a single ruling.

    Ids of identifier-less collections are positions in the whole collection,
    since each CLI call starts without a search cache.
    """
    ctx = _open(data_dir)
    try:
        retrieved = ctx.get_document(source, document_id, query)
    except DocumentNotFoundError as e:
        typer.echo(f"Document not found: {e}", err=True)
        raise typer.Exit(1) from e
    except RulingSearchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps(retrieved.to_dict(), ensure_ascii=False, indent=2))
        return

    doc = retrieved.document
    typer.echo(f"{doc.title}\n[{doc.source}] [{doc.category.value}] id={doc.id}\n")
    typer.echo(doc.content)


@app.command()
def documents(
    source: str = typer.Argument(..., help="Collection to list"),
    data_dir: DataDirOption = None,
) -> None:
    """List every ruling in a collection."""
    ctx = _open(data_dir)
    try:
        docs = ctx.list_documents(source)
    except RulingSearchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"{len(docs)} documents:\n")
    for doc in docs:
        typer.echo(f"  {doc.id}: [{doc.category.value}] {doc.title[:80]}")


@app.command()
def collections(
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List configured collections."""
    described = _open(data_dir).describe_collections()
    if output_json:
        typer.echo(json.dumps(described, ensure_ascii=False, indent=2))
        return
    for entry in described:
        status = entry.get("error") or (
            "stable ids" if entry.get("has_stable_id") else "positional ids"
        )
        flag = " (mutable)" if entry["mutable"] else ""
        typer.echo(f"  {entry['name']}{flag}: {status}")


@app.command(name="import")
def import_cmd(
    files: list[Path] = typer.Argument(..., help=".doc/.docx files to import"),
    data_dir: DataDirOption = None,
) -> None:
    """Import ruling files into the user collection."""
    from ruling_search.core.importer.loader import import_files

    ctx = _open(data_dir)
    try:
        stats = import_files(ctx.store, ctx.default_writable.name, files)
    except RulingSearchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Imported {stats.documents_imported} documents, skipped {stats.documents_skipped}")


@app.command()
def clear(
    data_dir: DataDirOption = None,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every ruling in the user collection."""
    ctx = _open(data_dir)
    name = ctx.default_writable.name
    if not yes:
        typer.confirm(f"Delete all documents in {name}?", abort=True)
    try:
        deleted = ctx.clear()
    except RulingSearchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Deleted {deleted} documents from {name}")


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p", help="Port to listen on"),
    data_dir: DataDirOption = None,
) -> None:
    """Start the HTTP API server."""
    from ruling_search.web.app import run_server

    run_server(host, port, data_dir=data_dir)


@app.command()
def mcp() -> None:
    """Start the MCP server (stdio transport)."""
    from ruling_search.mcp.server import run_mcp_server

    run_mcp_server()
