"""
Main entrypoint for the Campus Event Hub API.

This module assembles the FastAPI application, sets up logging,
error handlers and the activity-log middleware, and includes the
versioned routers.  The ``create_app`` function builds and configures
the app, which is then instantiated at module import time as
``app``::

    uvicorn campus_event_hub.app.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ServiceError
from .core.logging_config import setup_logging
from .services.activity_service import activity_log

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply migrations at startup; creates the database file if needed.
    init_db()
    logger.info("%s %s started", settings.project_name, settings.api_version)
    yield


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def record_activity(request: Request, call_next):
        start = time.perf_counter()
        logger.info("%s %s", request.method, request.url.path)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            activity_log.record(
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000,
                request.headers.get("user-agent"),
            )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _format_validation_errors(exc)},
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        # Errors not translated by a route.  Anything 5xx is reported
        # generically; the original message only goes to the log.
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(v1_router, prefix=API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.project_name,
            "version": settings.api_version,
            "endpoints": {
                "health": f"{API_PREFIX}/health",
                "activity": f"{API_PREFIX}/activity",
                "events": f"{API_PREFIX}/events",
                "registrations": f"{API_PREFIX}/registrations",
                "auth": f"{API_PREFIX}/auth",
            },
        }

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
