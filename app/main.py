"""
Author Analysis Web Server

FastAPI application that:
- Forwards the API prefix to the analysis API
- Serves static resources (HTML files, images, etc.) from the static root
- Answers every other request with the fallback file
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp

from config import Config
from app.models.schemas import RouterSettings
from app.routes import SiteRouter, analysis_router
from app.routes.analysis import init_analysis_routes
from app.services import AnalysisClient, AnalysisError, create_analysis_client
from app.utils.performance import timer_context
from app import __version__


def configure_logging():
    """
    Configure root logging from Config (stream, plus file when configured).

    Replaces any handlers installed earlier (run.py configures logging before
    the app is imported).
    """
    handlers = [logging.StreamHandler()]
    if Config.SERVER_LOG_FILE:
        handlers.append(logging.FileHandler(Config.SERVER_LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


configure_logging()
logger = logging.getLogger(__name__)


# ===== API Application =====

def create_api_app(client: Optional[AnalysisClient] = None) -> FastAPI:
    """
    Build the analysis API mounted beneath the API prefix.

    Args:
        client: Analysis backend (defaults to the configured one)

    Returns:
        FastAPI sub-application
    """
    api = FastAPI(
        title="Author Analysis API",
        description="API for the Author Analysis program",
        version=__version__,
        docs_url="/docs",
        redoc_url=None
    )

    init_analysis_routes(api, client or create_analysis_client())
    api.include_router(analysis_router)

    @api.exception_handler(AnalysisError)
    async def analysis_exception_handler(request: Request, exc: AnalysisError):
        """Report analysis backend failures as JSON."""
        logger.error(f"Analysis error on {request.url.path}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "status_code": exc.status_code,
                "path": str(request.url.path)
            }
        )

    @api.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handle HTTP exceptions with JSON error messages.

        Args:
            request: The request that caused the error
            exc: The HTTP exception

        Returns:
            JSON error response
        """
        logger.error(f"HTTP {exc.status_code} error on {request.url.path}: {exc.detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "status_code": exc.status_code,
                "path": str(request.url.path)
            }
        )

    @api.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors (e.g., empty text)."""
        logger.error(f"Validation error on {request.url.path}: {exc.errors()}")

        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid request data",
                "details": jsonable_errors(exc),
                "path": str(request.url.path)
            }
        )

    return api


def jsonable_errors(exc: RequestValidationError):
    """Validation errors without the non-serialisable 'ctx'/'input' payloads."""
    return [
        {key: value for key, value in error.items() if key not in ("ctx", "input", "url")}
        for error in exc.errors()
    ]


# ===== Site Application =====

def create_app(settings: Optional[RouterSettings] = None, api_app: Optional[ASGIApp] = None) -> FastAPI:
    """
    Build the web server application.

    Args:
        settings: Routing configuration (defaults to Config.router_settings())
        api_app: ASGI application handling the API prefix (defaults to the analysis API)

    Returns:
        FastAPI application dispatching every request through SiteRouter
    """
    settings = settings or Config.router_settings()

    with timer_context("Startup: build site router"):
        if api_app is None:
            api_app = create_api_app()
        site = SiteRouter(settings, api_app)

    if not os.path.isdir(settings.static_root):
        logger.warning(f"Static directory not found: {settings.static_root}")
    if not os.path.isfile(settings.fallback_file):
        logger.warning(f"Fallback file not found: {settings.fallback_file}")

    # The site router owns every path, so the outer app exposes no docs of its own
    app = FastAPI(
        title="Author Analysis",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.settings = settings

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Handle unexpected errors (e.g. a missing fallback file).

        Args:
            request: The request that caused the error
            exc: The exception

        Returns:
            JSON error response
        """
        logger.exception(f"Unexpected error on {request.url.path}: {exc}")

        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred",
                "message": str(exc),
                "path": str(request.url.path)
            }
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request and its response status."""
        logger.debug(f"{request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    @app.on_event("startup")
    async def startup_event():
        """Log the routing table."""
        methods = ", ".join(settings.fallback_methods) if settings.fallback_methods else "any"
        logger.info("=" * 60)
        logger.info(f"Author Analysis Server v{__version__} started")
        logger.info("=" * 60)
        logger.info("Routes (first match wins):")
        logger.info(f"  1. {settings.api_prefix}/*  -> analysis API")
        logger.info(f"  2. static files  -> {settings.static_root}")
        logger.info(f"  3. *  ({methods}) -> {settings.fallback_file} [{settings.fallback_status}]")
        logger.info("=" * 60)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Author Analysis Server shutting down...")

    app.mount("/", site, name="site")

    return app


# ===== Export for ASGI Servers =====
# This allows running with: uvicorn app.main:app

app = create_app()
