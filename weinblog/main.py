"""FastAPI application entry point for WeinBlog."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from weinblog import __version__
from weinblog.catalog import load_catalog
from weinblog.config import settings
from weinblog.services import OCRService, ScanDebouncer, SourceUrlStore, WineMatcher

logger = logging.getLogger(__name__)


# Rate limiter configuration
limiter = Limiter(key_func=get_remote_address)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Permitted-Cross-Domain-Policies"] = "none"
        response.headers["Content-Security-Policy"] = "frame-ancestors 'none'; object-src 'none';"

        if settings.enforce_https:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


def init_state(app: FastAPI) -> None:
    """Load the catalog and attach the matching services to ``app.state``."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    catalog = load_catalog(settings.catalog_path)
    app.state.catalog = catalog
    app.state.matcher = WineMatcher(catalog)
    app.state.source_urls = SourceUrlStore(settings.source_urls_file)
    app.state.scan_debouncer = ScanDebouncer(settings.scan_debounce_seconds)
    app.state.ocr_service = OCRService()

    logger.info(
        "WeinBlog ready: %d wines, OCR %s",
        len(catalog),
        "enabled" if settings.ocr_enabled else "disabled",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    init_state(app)
    yield
    logger.info("WeinBlog shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Wine identification by scan code, label text and product URL",
    version=__version__,
    lifespan=lifespan,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Only allow origins from the whitelist; empty list means same-origin only
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        max_age=600,  # Cache preflight for 10 minutes
    )

app.add_middleware(SecurityHeadersMiddleware)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    catalog = getattr(request.app.state, "catalog", None)
    return JSONResponse(
        content={
            "status": "healthy",
            "version": __version__,
            "app_name": settings.app_name,
            "wines": len(catalog) if catalog is not None else 0,
        }
    )


# Import and include routers
from weinblog.routers import match, search, wines  # noqa: E402

app.include_router(wines.router, prefix="/api/wines", tags=["Wines"])
app.include_router(search.router, prefix="/api/search", tags=["Search"])
app.include_router(match.router, prefix="/api/match", tags=["Identification"])
