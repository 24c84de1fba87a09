from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import PhotoVaultError, photo_vault_error_handler
from app.core.logging_config import (
    setup_logging,
    CorrelationIdMiddleware,
    log_event,
)
from app.core.rate_limit import limiter
from app.api.endpoints import photos, search_history
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting Photo Vault application...")

    database = Database(settings.DATABASE_URL)
    database.create_all()
    app.state.database = database

    log_event(
        event_type="app.startup",
        message="Photo Vault application started",
        event_category="system",
        debug=settings.DEBUG,
    )

    yield

    # Shutdown
    logger.info("Shutting down Photo Vault application...")
    database.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Photo Vault",
        description="Save provider photos, tag them and search by tag",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add correlation ID middleware (first, so all logs have correlation IDs)
    app.add_middleware(CorrelationIdMiddleware)

    # Add rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(PhotoVaultError, photo_vault_error_handler)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(photos.router, prefix="/api/photos", tags=["photos"])
    app.include_router(
        search_history.router, prefix="/api/search-history", tags=["search-history"]
    )

    @app.get("/")
    def root():
        return {
            "name": "Photo Vault",
            "version": "1.0.0",
            "description": "Tagged photo catalog backed by Unsplash",
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
