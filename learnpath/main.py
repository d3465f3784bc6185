"""
FastAPI application entry point for the LearnPath backend.

This module creates the FastAPI app instance, manages the lifetime of the
outbound clients (Gemini, link probe HTTP client) and registers all routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learnpath.clients import create_gemini_client, create_link_probe_client
from learnpath.config import settings
from learnpath.routes.auth import router as auth_router
from learnpath.routes.health import router as health_router
from learnpath.routes.profile import router as profile_router
from learnpath.routes.recommendations import router as recommendations_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (no origins if unset)
    - Any other environment: Allows all origins for local development

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the dashboard."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the outbound clients on startup and close them on shutdown."""
    app.state.gemini_client = create_gemini_client()
    app.state.link_probe_client = create_link_probe_client()
    logger.info("Outbound clients initialized")
    try:
        yield
    finally:
        await app.state.link_probe_client.aclose()
        logger.info("Outbound clients closed")


# Create FastAPI app
app = FastAPI(
    title="LearnPath API",
    description="Backend service for the LearnPath student learning dashboard",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


def _safe_errors(exc: RequestValidationError) -> list:
    # 'input' may hold passwords, 'ctx' may hold exception objects
    return [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors and return them in the API's error shape."""
    errors = _safe_errors(exc)
    logger.error(f"Validation error on {request.method} {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": errors,
        }
    )


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(recommendations_router)

logger.info("FastAPI app initialized successfully")
