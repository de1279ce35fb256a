"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snippetbox import __version__
from snippetbox.api import (
    clipboard_router,
    expansion_router,
    logs_router,
    snippets_router,
    templates_router,
)
from snippetbox.api.expansion import sync_keyword_map
from snippetbox.api.schemas import ErrorResponse
from snippetbox.core.config import Settings, get_settings
from snippetbox.core.factory import ComponentFactory
from snippetbox.core.logging_config import RecentLogBuffer, setup_logging
from snippetbox.db.repository import SnippetRepository
from snippetbox.db.session import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Opens the snippet store and builds the clipboard, executor and
    auto-expander services on startup; closes the store on shutdown.
    """
    settings: Settings = app.state.settings
    factory: ComponentFactory = app.state.factory

    # Startup
    logger.info("Starting snippetbox API...")

    database = Database(settings)
    try:
        logger.info("Opening database...")
        await database.open()
        logger.info("Database opened successfully")
    except Exception as e:
        logger.error(f"Failed to open database: {e}", exc_info=True)
        raise

    app.state.database = database
    app.state.executor = factory.get_executor()
    app.state.auto_expander = factory.get_auto_expander()

    async with database.session() as session:
        count = await sync_keyword_map(SnippetRepository(session), app.state.auto_expander)
    logger.info(f"Loaded {count} keyword(s) for auto-expansion")

    yield

    # Shutdown
    logger.info("Shutting down snippetbox API...")

    try:
        await database.close()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {e}", exc_info=True)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    settings.configure_logging()

    log_buffer = RecentLogBuffer(capacity=settings.log_buffer_size)
    setup_logging(settings, log_buffer)

    app = FastAPI(
        title="snippetbox",
        description="Text snippets with clipboard, cursor and argument placeholders",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store settings and services in app state
    app.state.settings = settings
    app.state.factory = ComponentFactory(settings)
    app.state.log_buffer = log_buffer

    # CORS middleware for the local frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    for router in (
        snippets_router,
        templates_router,
        clipboard_router,
        expansion_router,
        logs_router,
    ):
        app.include_router(router)
        logger.info(f"Registered router: {router.prefix}")

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "snippetbox-api",
            "version": __version__,
            "clipboard": settings.clipboard_backend,
        }

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handle Pydantic validation errors."""
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                detail="Validation error",
                error_code="VALIDATION_ERROR",
                extra={"errors": jsonable_errors(exc)},
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                detail="Internal server error",
                error_code="INTERNAL_ERROR",
            ).model_dump(),
        )

    logger.info("FastAPI application created successfully")
    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context (e.g. exception objects) from validation errors."""
    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info("Starting uvicorn server on port 8000...")
    uvicorn.run(
        "snippetbox.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
