"""URL Shortener Service - Main FastAPI Application.

A URL shortening service with:
- Deterministic, idempotent short codes
- Collision-safe code allocation under concurrency
- Expansion and redirection of short codes
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import get_db
from .core.exceptions import (
    InvalidURLError,
    ShortCodeNotFoundError,
    StoreUnavailableError,
    URLShortenerError,
)
from .api.routes import health_router, urls_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_title}...")
    db = get_db()
    db.init_db()
    logger.info("Database initialized")
    yield
    # Shutdown
    logger.info("Shutting down URL Shortener Service...")
    db.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, exc: URLShortenerError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_code": exc.error_code},
    )


@app.exception_handler(InvalidURLError)
async def invalid_url_handler(request: Request, exc: InvalidURLError):
    """Reject malformed URLs with 400."""
    logger.info(f"Rejected URL: {exc}")
    return _error_response(400, exc)


@app.exception_handler(ShortCodeNotFoundError)
async def not_found_handler(request: Request, exc: ShortCodeNotFoundError):
    """Unknown short codes are 404."""
    return _error_response(404, exc)


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    """Store failures are 503."""
    logger.error(f"Store unavailable: {exc}")
    return _error_response(503, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Unreadable or mistyped request bodies are 400."""
    logger.info(f"Rejected request body: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "error_code": "400"},
    )


@app.exception_handler(URLShortenerError)
async def shortener_error_handler(request: Request, exc: URLShortenerError):
    """Any other shortener failure is 500."""
    logger.error(f"Shortener error: {exc}")
    return _error_response(500, exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.error(f"Unhandled Exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_code": "500"},
    )


# Include routers
app.include_router(health_router)
app.include_router(urls_router)
