"""FastAPI application serving the ruling search API."""

import shutil
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from ruling_search.config import UPLOAD_DIR_NAME
from ruling_search.context import SearchContext, open_context
from ruling_search.core.importer.loader import check_upload_name
from ruling_search.errors import (
    DocumentNotFoundError,
    InvalidIdError,
    ReadOnlyCollectionError,
    RulingSearchError,
    UnknownCollectionError,
    UnsupportedFileTypeError,
)
from ruling_search.models.search import parse_search_request

_BAD_REQUEST_ERRORS = (
    InvalidIdError,
    UnknownCollectionError,
    ReadOnlyCollectionError,
    UnsupportedFileTypeError,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _context(request: Request) -> SearchContext:
    return request.app.state.context


def _upload_dir(ctx: SearchContext) -> Path:
    root = ctx.data_dir or Path(".")
    upload_dir = root / UPLOAD_DIR_NAME
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def create_app(context: SearchContext | None = None) -> FastAPI:
    """Create the API app. Without a context, one is opened from configuration on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.context = context or open_context()
        logger.info("Ruling search API ready.")
        yield
        logger.info("Ruling search API shut down.")

    app = FastAPI(
        title="Ruling Search",
        description="Keyword search over court ruling collections.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DocumentNotFoundError)
    async def _not_found(_request: Request, exc: DocumentNotFoundError) -> JSONResponse:
        return _error(404, f"Document not found: {exc}")

    @app.exception_handler(RulingSearchError)
    async def _search_error(_request: Request, exc: RulingSearchError) -> JSONResponse:
        if isinstance(exc, _BAD_REQUEST_ERRORS):
            return _error(400, str(exc))
        logger.error("Request failed: {}", exc)
        return _error(500, f"数据库操作出错: {exc}")

    @app.get("/")
    def root() -> dict[str, str]:
        return {"service": "ruling-search", "status": "running"}

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/api/collections")
    def collections(request: Request) -> dict[str, object]:
        described = _context(request).describe_collections()
        return {"collections": described, "count": len(described)}

    @app.get("/api/search")
    def search(
        request: Request,
        q: str = "",
        exclude: str = "",
        type: str | None = None,
        docType: str | None = None,
        source: str | None = None,
    ) -> JSONResponse:
        try:
            search_request = parse_search_request(
                q, exclude=exclude, scope=type, category=docType, source=source
            )
        except ValueError as e:
            return _error(400, str(e))
        documents = _context(request).search(search_request)
        return JSONResponse(content=[doc.to_dict() for doc in documents])

    @app.get("/api/document/{document_id}")
    def get_document(
        request: Request, document_id: str, source: str = "", q: str | None = None
    ) -> JSONResponse:
        retrieved = _context(request).get_document(source, document_id, q)
        return JSONResponse(content=retrieved.to_dict())

    @app.post("/api/upload")
    def upload(request: Request, file: UploadFile = File(...)) -> JSONResponse:
        ctx = _context(request)
        filename = file.filename or ""
        title = check_upload_name(filename)
        logger.info("Processing upload: {}", filename)

        temp_path = _upload_dir(ctx) / f"{time.time_ns()}-{Path(filename).name}"
        try:
            with open(temp_path, "wb") as out:
                shutil.copyfileobj(file.file, out)
            stored_title = ctx.import_file(temp_path, title=title)
        finally:
            temp_path.unlink(missing_ok=True)

        return JSONResponse(content={"message": "文档上传成功", "title": stored_title})

    @app.post("/api/clear-db")
    def clear_db(request: Request) -> JSONResponse:
        deleted = _context(request).clear()
        return JSONResponse(content={"message": "数据库已成功清空", "deleted": deleted})

    return app


def run_server(host: str, port: int, *, data_dir: Path | None = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    context = open_context(data_dir) if data_dir is not None else None
    logger.info("Server running on all interfaces at http://{}:{}", host, port)
    uvicorn.run(create_app(context), host=host, port=port)
