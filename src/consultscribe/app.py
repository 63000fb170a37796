"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.errors import APIError
from .api.routers import health, speakers
from .api.utils.responses import fail
from .core.config import get_settings
from .core.exceptions import ConsultScribeException, ExternalServiceError
from .core.structured_logger import configure_logging
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware

logger = logging.getLogger("consultscribe")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(
        f"Speaker correction: {'enabled' if settings.speaker_correction.enabled else 'disabled'}"
    )
    yield
    logger.info(f"Shutting down {settings.app_name}")


def _error_content(request: Request, error: str, message: str, details=None) -> dict:
    return fail(request, error, message, details).model_dump()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.format)

    app = FastAPI(
        title="Consult-Scribe Speaker Attribution",
        description="Labels doctor-patient consultation transcripts turn by turn",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )

    # Add performance tracking middleware
    app.add_middleware(PerformanceMiddleware)

    # Registered last so it runs first and the request id is visible to everything below
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(speakers.router)

    # Global exception handler for domain errors
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(
            status_code=400,
            content=_error_content(request, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details),
        )

    @app.exception_handler(ConsultScribeException)
    async def service_error_handler(request: Request, exc: ConsultScribeException):
        status_code = 502 if isinstance(exc, ExternalServiceError) else 500
        logger.error(f"{type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=_error_content(request, exc.error_code or "SERVICE_ERROR", exc.message, exc.details),
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.warning(
            f"APIError: {exc.code} ({exc.http_status}) {exc.message} "
            f"| request_id={getattr(request.state, 'request_id', None)}"
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=_error_content(request, exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def pydantic_error_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        logger.warning(f"ValidationError on {request.method} {request.url.path}: {error_details}")

        error_messages = []
        for error in error_details:
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            msg = error.get("msg", "Validation error")
            error_messages.append(f"{loc}: {msg}")

        return JSONResponse(
            status_code=422,
            content=_error_content(
                request,
                "INVALID_INPUT",
                f"Input validation failed: {'; '.join(error_messages)}",
                {"errors": [{"loc": list(e.get("loc", [])), "msg": e.get("msg")} for e in error_details],
                 "path": request.url.path},
            ),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {type(exc).__name__}")
        return JSONResponse(
            status_code=500,
            content=_error_content(
                request,
                "INTERNAL_ERROR",
                "An unexpected error has occurred. Please try again later.",
            ),
        )

    # Root endpoint
    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "classify_speakers": "POST /speakers/classify",
                "remap_speakers": "POST /speakers/remap",
                "patient_info": "POST /speakers/patient-info",
                "detect_language": "POST /speakers/language",
                "diarized_transcript": "POST /speakers/diarized",
                "extract_details": "POST /speakers/extract",
            },
        }

    return app


# Create the app instance
app = create_app()
