#!/usr/bin/env python
"""FastAPI server for the webtool API."""

import sys
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import core, submissions, videos
from services.kv_store import KVStore, SQLiteKVStore, create_kv_store
from utils.config import load_config, validate_config
from utils.logging import clear_request_context, get_logger, set_request_context, setup_logging

logger = get_logger(__name__)


def cors_headers(config: dict) -> dict[str, str]:
    """Fixed cross-origin header set added to every response."""
    return {
        "Access-Control-Allow-Origin": config.get("cors_allow_origin", "*"),
        "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def _format_validation_errors(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        # Drop the leading "body" so messages name the client's own fields
        loc = [str(part) for part in err.get("loc", ())[1:]]
        parts.append(f"{'.'.join(loc)}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the configured store unless one was injected, and close what we opened."""
    owned_store: SQLiteKVStore | None = None
    if app.state.store is None:
        store = create_kv_store(app.state.config)
        if isinstance(store, SQLiteKVStore):
            await store.connect()
            owned_store = store
        app.state.store = store

    try:
        yield
    finally:
        if owned_store is not None:
            await owned_store.close()
            app.state.store = None


def create_app(config: dict | None = None, store: KVStore | None = None) -> FastAPI:
    """Build the API application.

    Args:
        config: Configuration dict, defaults to ``load_config()``
        store: Key-value store to use. When omitted the configured backend
               is created at startup and closed at shutdown.

    Returns:
        Configured FastAPI application

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or load_config()
    errors = validate_config(config)
    if errors:
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    # Trailing-slash variants are not routes; answer them 404 instead of redirecting
    app = FastAPI(title="Webtool API", version="1.0.0", lifespan=lifespan, redirect_slashes=False)
    app.state.config = config
    app.state.store = store

    headers = cors_headers(config)

    @app.middleware("http")
    async def gateway_middleware(request: Request, call_next) -> Response:
        """CORS preflight, request correlation and the last-resort error handler."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        set_request_context(uuid.uuid4().hex[:12])
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error for {request.method} {request.url.path}: {e}")
            response = JSONResponse({"error": str(e)}, status_code=500)
        finally:
            clear_request_context()

        response.headers.update(headers)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and known paths with the wrong method are both "Not Found"
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Not Found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _format_validation_errors(exc.errors())
        logger.info(f"Rejected request body for {request.method} {request.url.path}: {message}")
        return JSONResponse({"error": message}, status_code=400)

    app.include_router(core.router)
    app.include_router(videos.router)
    app.include_router(submissions.router)

    return app


_config = load_config()
setup_logging(_config["log_level"], json_output=_config["log_json"])

app = create_app(_config)
