"""Directory browsing HTTP server: FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from typing import Optional
from urllib.parse import quote
import logging
import time

from config import get_settings
from errors import ServeError
from filesystem import FileSystem, LocalFileSystem
from path_resolver import resolve
from renderer import render

logger = logging.getLogger(__name__)

def extract_raw_path(request: Request) -> bytes:
    """Still-encoded request path without the leading slash or query string"""
    raw = request.scope.get("raw_path")
    if raw is None:
        # scope["path"] is already decoded; re-encode so it is decoded once
        raw = quote(request.scope["path"], safe="/").encode("ascii")
    raw = raw.split(b"?", 1)[0]
    return raw[1:] if raw.startswith(b"/") else raw

def create_app(root: str, filesystem: Optional[FileSystem] = None) -> FastAPI:
    """Build the application serving ``root``.

    ``root`` must already be canonical; it is captured here and never changes
    for the lifetime of the app. ``filesystem`` defaults to the local disk.
    """
    filesystem = filesystem or LocalFileSystem()
    settings = get_settings()

    # No docs/openapi routes: every path belongs to the served tree
    app = FastAPI(
        title=settings.app_name,
        description="Serve a directory over HTTP (with directory listings)",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def track_performance(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        processing_time = time.time() - start_time
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({processing_time:.3f}s)")
        response.headers["X-Processing-Time"] = str(round(processing_time, 3))

        return response

    @app.exception_handler(ServeError)
    async def serve_error_handler(request: Request, exc: ServeError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.get("/{path:path}")
    def serve_path(request: Request) -> Response:
        """Serve a file or a directory listing from the root"""
        target = resolve(root, extract_raw_path(request), filesystem)
        return render(root, target, filesystem)

    return app
