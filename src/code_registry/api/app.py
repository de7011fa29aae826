"""
FastAPI Application Setup.

Main application factory for the Code Registry web service.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from code_registry.api.middleware.logging import RequestLoggingMiddleware
from code_registry.api.routes import api, codes, health
from code_registry.api.schemas.exceptions import APIException
from code_registry.config import RegistryConfig
from code_registry.core.exceptions import FatalRegistryError
from code_registry.registry.storage import CodeRegistry
from code_registry.version import __version__

logger = logging.getLogger(__name__)

FatalHandler = Callable[[FatalRegistryError], None]


def terminate(exc: FatalRegistryError) -> None:
    """Stop the process immediately with the error's exit code."""
    logging.shutdown()
    os._exit(exc.exit_code)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for startup and shutdown events.

    Loads the registry snapshot on startup unless the caller already did.
    """
    logger.info("Code Registry starting up...")
    logger.info(f"Version: {__version__}")

    registry: CodeRegistry = app.state.registry
    if not registry.loaded:
        registry.load()
    logger.info(f"Serving {len(registry)} message codes from {registry.snapshot_path}")

    yield

    logger.info("Code Registry shutting down...")


def create_app(
    registry: CodeRegistry | None = None,
    *,
    on_fatal: FatalHandler | None = None,
    title: str = "Message Code Registry",
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Registry to serve; built from the environment when omitted
        on_fatal: Called with a fatal storage error; defaults to terminating the process
        title: Application title for OpenAPI docs

    Returns:
        Configured FastAPI application instance
    """
    if registry is None:
        registry = CodeRegistry(RegistryConfig.from_env().snapshot_path)

    app = FastAPI(
        title=title,
        description="Web-administered registry of numbered message codes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.on_fatal = on_fatal or terminate

    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(codes.router, tags=["Codes"])
    app.include_router(api.router, prefix="/api/v1/codes", tags=["API"])
    app.include_router(health.router, prefix="/health", tags=["Health"])

    # Exception handlers
    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException) -> Response:
        """Plain text for the form endpoints, JSON for /api/."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message} {exc.detail or ''}")
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": {
                        "type": exc.error_type,
                        "message": exc.message,
                        "detail": exc.detail,
                    }
                },
            )
        return PlainTextResponse(exc.message + "\n", status_code=exc.status_code)

    @app.exception_handler(FatalRegistryError)
    async def fatal_exception_handler(request: Request, exc: FatalRegistryError) -> Response:
        """Log the failure and hand it to the fatal handler."""
        logger.critical(f"Fatal registry error, terminating (exit {exc.exit_code}): {exc}")
        request.app.state.on_fatal(exc)
        return PlainTextResponse("Registry storage failure.\n", status_code=500)

    return app
