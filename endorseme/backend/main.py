"""
FastAPI Application Entry Point.

This is the main entry point for the Endorse Me backend application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from endorseme.backend.api import health, pages
from endorseme.backend.api.v1 import router as api_v1_router
from endorseme.backend.core.config import get_app_config
from endorseme.backend.core.database import dispose_engine
from endorseme.backend.core.dependencies import get_activity_service
from endorseme.backend.core.environment import validate_telegram_env
from endorseme.backend.core.exception_handlers import register_exception_handlers
from endorseme.backend.core.logging import get_logger, setup_logging
from endorseme.backend.core.middleware import RequestContextMiddleware
from endorseme.telegram.bot import cleanup_bot

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    env = validate_telegram_env()
    if not env.is_valid:
        logger.error(
            "Telegram configuration incomplete",
            extra={"missing_vars": env.missing_vars},
        )

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "telegram_configured": env.is_valid,
        },
    )
    yield
    await get_activity_service().drain()
    await cleanup_bot()
    await dispose_engine()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(pages.router)
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn endorseme.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
