"""
FastAPI Application Setup

Main entry point for the eventreg API application.

Responsibility:
    - FastAPI app initialization
    - Router registration (exports)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check and readiness endpoints
    - Shutdown: close the Redis pool and dispose the database engine

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from eventreg import __version__
from eventreg.api.routers import exports
from eventreg.api.schemas.common import ErrorResponse
from eventreg.application.queries.get_export_status import ExportNotFoundException
from eventreg.domain.shared.exceptions import (
    DomainException,
    InvalidExportRequestError,
    StatusCacheError,
    StorageError,
)
from eventreg.infrastructure.persistence.database import (
    check_database_connection,
    reset_engine,
)
from eventreg.infrastructure.persistence.redis.connection import (
    close_connections,
    health_check as redis_health_check,
)

# Configure logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: Health status (always "ok" if endpoint responds)
        version: Package version
        timestamp: Unix timestamp of health check
    """

    status: str = "ok"
    version: str = __version__
    timestamp: float


class ReadinessResponse(BaseModel):
    """
    Readiness response model.

    Attributes:
        status: "ready" when every dependency answered, else "unavailable"
        database: SELECT 1 succeeded
        redis: PING succeeded
    """

    status: str
    database: bool
    redis: bool


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Release the Redis pool and the database engine on shutdown."""
    logger.info("Application startup complete")
    try:
        yield
    finally:
        logger.info("Application shutdown: releasing connections")
        close_connections()
        reset_engine()


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Log every request with method, path, status code and duration.

    Logging Format:
        INFO: "Incoming request: POST /api/exports/orders"
        INFO: "Request completed: POST /api/exports/orders - 202 - 0.012s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Convert DomainException subclasses to ErrorResponse.

    Mapping:
        - InvalidExportRequestError -> 400 Bad Request
        - StatusCacheError, StorageError -> 503 Service Unavailable
        - Other DomainException -> 400 Bad Request
    """
    details = {"exception_type": exc.__class__.__name__}
    if isinstance(exc, (StatusCacheError, StorageError)):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        error_code = "SERVICE_UNAVAILABLE"
    elif isinstance(exc, InvalidExportRequestError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_code = "INVALID_EXPORT_REQUEST"
        if exc.field_name:
            details["field"] = exc.field_name
    else:
        status_code = status.HTTP_400_BAD_REQUEST
        error_code = exc.__class__.__name__.replace("Error", "").upper()

    error_response = ErrorResponse(code=error_code, message=exc.message, details=details)

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def export_not_found_exception_handler(
    request: Request, exc: ExportNotFoundException
):
    """Convert ExportNotFoundException to 404 Not Found."""
    error_response = ErrorResponse(
        code="EXPORT_NOT_FOUND",
        message=str(exc),
        details={"export_id": exc.export_id},
    )

    logger.info(
        f"Export not found: {exc.export_id} - Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all: 500 Internal Server Error, full traceback in the log."""
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Routers: /api/exports
        - Health: GET /health, readiness: GET /health/ready
        - Lifespan: connection cleanup on shutdown
        - CORS: allow all origins (development mode)

    Usage:
        >>> app = create_app()
        >>> # uvicorn eventreg.api.main:app --reload
    """
    app = FastAPI(
        title="eventreg API",
        version=__version__,
        description=(
            "Back-office API for event registrations: queue order CSV exports "
            "and poll their status."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(ExportNotFoundException, export_not_found_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(exports.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        return HealthCheckResponse(status="ok", version=__version__, timestamp=time.time())

    @app.get(
        "/health/ready",
        response_model=ReadinessResponse,
        responses={503: {"model": ReadinessResponse}},
        summary="Readiness check (database and Redis)",
        tags=["health"],
    )
    def readiness_check():
        # Both checks block; a sync handler runs in the threadpool
        database_ok = check_database_connection()
        redis_ok = redis_health_check()
        ready = database_ok and redis_ok
        if not ready:
            logger.warning(f"Readiness check failed: database={database_ok}, redis={redis_ok}")
        body = ReadinessResponse(
            status="ready" if ready else "unavailable",
            database=database_ok,
            redis=redis_ok,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/exports")

    return app


# Usage: uvicorn eventreg.api.main:app --reload
app = create_app()
