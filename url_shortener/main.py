"""URL Shortener Service - Main FastAPI Application.

Maps short aliases to long URLs:
- Save a URL under a given or generated alias
- Redirect from an alias to its URL, served from Redis when cached
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.cache import get_cache
from .core.config import settings
from .core.database import get_db
from .core.exceptions import AppError, InternalError
from .core.logging import setup_logging
from .api.routes import health_router, urls_router
from .middleware import RequestIDMiddleware

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "Error", "error": message},
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    setup_logging(settings.env, settings.log_level)
    logger.info(f"Starting {settings.app_title} (env={settings.env})")
    logger.debug("debug messages are enabled")
    db = get_db()
    db.ping()
    db.init_db()
    cache = get_cache()
    await cache.connect()
    yield
    # Shutdown
    logger.info("Shutting down URL Shortener Service...")
    try:
        db.close()
    except Exception as e:
        logger.error(f"Failed to close storage: {e}")
    try:
        await cache.close()
    except Exception as e:
        logger.error(f"Failed to close cache: {e}")
    logger.info("Server stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Translate service errors to JSON error bodies."""
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Undecodable or mistyped request bodies are client errors."""
    logger.info(f"failed to decode request body: {exc.errors()}")
    return error_response(400, "failed to decode request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


# Include routers; health first so /health is never read as an alias
app.include_router(health_router)
app.include_router(urls_router)


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.idle_timeout,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    run()
