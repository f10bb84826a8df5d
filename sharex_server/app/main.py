"""Application factory: one FastAPI app per ``ServerConfig``."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from ..utils.logging_setup import configure_logging
from .adapters.storage import UploadStorage
from .config import ServerConfig
from .exceptions import RequestError
from .routers import files, listing, root, sxcu, upload
from .startup import build_lifespan

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig) -> FastAPI:
    log = configure_logging(config.debug)
    storage = UploadStorage(config.save_path, log=log)

    # No docs/openapi routes: any single path segment may be a stored file name
    app = FastAPI(
        title="ShareX Server",
        description="Self-hosted upload endpoint for the ShareX screenshot tool",
        lifespan=build_lifespan(storage),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.storage = storage
    app.state.log = log

    if config.trust_proxy:
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    # Request timing for the debug channel (won't crash on exceptions)
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            dt = (time.time() - t0) * 1000
            log.debug("%s %s -> ERR in %.1fms: %s: %s", request.method, request.url.path, dt, type(e).__name__, e)
            raise
        dt = (time.time() - t0) * 1000
        log.debug("%s %s -> %d in %.1fms", request.method, request.url.path, response.status_code, dt)
        return response

    @app.exception_handler(RequestError)
    async def _request_error(request: Request, exc: RequestError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        # framework 404/405 and malformed form bodies
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error for %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error."})

    # Fixed routes first; the single-segment file route catches everything else
    prefix = config.base_url.rstrip("/")
    if config.enable_sxcu:
        app.include_router(sxcu.router, prefix=prefix, tags=["sxcu"])
    if config.file_listing:
        app.include_router(listing.build_router(config.file_listing), prefix=prefix, tags=["listing"])
    app.include_router(upload.router, prefix=prefix, tags=["upload"])
    app.include_router(root.router, prefix=prefix, tags=["root"])
    app.include_router(files.router, prefix=prefix, tags=["files"])

    return app
