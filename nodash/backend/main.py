"""
FastAPI Application Entry Point.

This is the main entry point for the notes backend application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nodash.backend.api import health
from nodash.backend.api import router as api_router
from nodash.backend.core.config import get_app_config, get_settings
from nodash.backend.core.database import create_binding
from nodash.backend.core.exception_handlers import register_exception_handlers
from nodash.backend.core.logging import get_logger, setup_logging
from nodash.backend.core.middleware import RequestContextMiddleware
from nodash.backend.repositories.note import NoteRepository
from nodash.backend.schemas.base import StatusResponse

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Opens the configured storage binding unless a repository was
    injected through create_app, and closes it on shutdown.
    """
    app_config = get_app_config()
    setup_logging()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "backend": app_config.database.backend,
        },
    )

    owned: NoteRepository | None = None
    if getattr(app.state, "notes", None) is None:
        binding = create_binding(app_config, get_settings())
        owned = NoteRepository(binding)
        if app_config.database.init_schema_on_startup:
            await owned.init_schema()
        app.state.notes = owned

    try:
        yield
    finally:
        if owned is not None:
            await owned.binding.close()
            app.state.notes = None
        logger.info("Application shutting down")


def create_app(db: NoteRepository | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        db: Note repository to serve from. When omitted, one is built from
            database.yaml at startup.
    """
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.notes = db

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

    @app.get("/", response_model=StatusResponse, tags=["status"])
    async def status() -> StatusResponse:
        """Service identity and status."""
        return StatusResponse(name=app_settings.name, version=app_settings.version)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn nodash.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
