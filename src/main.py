"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.routes.public import router as public_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_feature_catalog
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build immutable configuration once, before the first request."""
    catalog = get_feature_catalog()
    logger.info(
        "application_started",
        app_env=settings.app_env,
        site_url=settings.site_url,
        feature_count=len(catalog.all_features),
    )
    yield
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Professional Profile Publishing\n\n"
            f"{settings.site_name} publishes a professional profile at a stable "
            "`/u/<username>` address.\n\n"
            "### Features\n"
            "- **Profiles**: structured identity fields, typed sections and "
            "work experience, edited in one atomic update\n"
            "- **Public pages**: rendered sections with SEO metadata\n"
            "- **Plans**: Free and Pro feature gating\n"
            "- **Analytics**: view and click tracking for Pro profiles\n\n"
            "### Authentication\n"
            "Write and account endpoints require a bearer JWT:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH: 10 requests/minute\n"
            "- Public pages and events: 60 requests/minute"
        ),
        version=settings.app_version,
        debug=settings.debug,
        contact={
            "name": f"{settings.site_name} Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "public",
                "description": "Public profile pages",
            },
            {
                "name": "profiles",
                "description": "Profile management and event tracking",
            },
            {
                "name": "account",
                "description": "The caller's access state",
            },
            {
                "name": "plans",
                "description": "Subscription plans",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(public_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
