"""Main FastAPI application entry point."""

import asyncio
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
from api.v1 import router as v1_router
from api.v1.dependencies import get_session_registry
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    registry = get_session_registry()

    async def session_cleanup_loop() -> None:
        """Periodically close browser sessions that went idle."""
        while True:
            await asyncio.sleep(settings.session_cleanup_interval_seconds)
            try:
                expired = registry.expire_idle()
                if expired > 0:
                    logger.info(
                        "session_cleanup_completed",
                        expired_count=expired,
                        active_sessions=len(registry),
                    )
            except Exception:
                logger.exception("session_cleanup_failed")

    cleanup_task = asyncio.create_task(session_cleanup_loop())
    logger.info("application_started", environment=settings.app_env)
    yield
    cleanup_task.cancel()
    registry.close_all()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Campus Community Portal\n\n"
            "Events, notices, discussions, lost & found and a campus tour for "
            "students and faculty.\n\n"
            "### Sessions\n"
            "Browsers open a session with `POST /api/v1/session` and sign in "
            "with a Google ID token. The session cookie carries the signed-in "
            "state; notifications are returned with every session response.\n\n"
            "### Authentication\n"
            "Page endpoints (except `/health` and the campus tour) require a "
            "valid JWT token in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH/DELETE: 10 requests/minute"
        ),
        version="1.0.0",
        debug=settings.debug,
        contact={
            "name": "Campus Portal Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "session", "description": "Browser session and sign-in state"},
            {"name": "profiles", "description": "User profiles"},
            {"name": "events", "description": "Campus events"},
            {"name": "notices", "description": "Notice board"},
            {"name": "discussions", "description": "Discussion forum"},
            {"name": "lost-found", "description": "Lost & found reports"},
            {"name": "campus", "description": "Campus tour directory"},
            {"name": "admin", "description": "Admin console"},
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

    # Session cookies need credentialed CORS
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
