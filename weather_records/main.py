from contextlib import asynccontextmanager

from fastapi import FastAPI

from weather_records.core.config import settings
from weather_records.core.errors import register_exception_handlers
from weather_records.core.init_db import init_db
from weather_records.core.logging_config import configure_logging
from weather_records.core.state import SessionState
from weather_records.routers.exports import router as exports_router
from weather_records.routers.health import router as health_router
from weather_records.routers.records import router as records_router
from weather_records.routers.session import router as session_router
from weather_records.routers.weather import router as weather_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup the storage schema is created if missing. Nothing needs
    releasing on shutdown.
    """
    await init_db()
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Configures logging from `LOG_LEVEL`.
    - Initializes the FastAPI app with metadata and documentation endpoints.
    - Attaches a fresh `SessionState` and the error handlers.
    - Registers all API routers.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Weather records API: current weather, saved historical summaries and export",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.session = SessionState()

    register_exception_handlers(app)

    # Register API routers
    app.include_router(health_router)
    app.include_router(weather_router)
    app.include_router(records_router)
    app.include_router(exports_router)
    app.include_router(session_router)

    return app


# Application entry point
app = create_app()
