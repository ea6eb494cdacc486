"""
Roadmap Tracker - Main Application Entry Point

Personal roadmap planner: tasks bucketed by day, week or month, stored in
a local key-value store or in a user-chosen directory.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roadmap_tracker.api.deps import get_key_value_store, get_storage_coordinator
from roadmap_tracker.api.errors import roadmap_tracker_error_handler
from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.exceptions import RoadmapTrackerError
from roadmap_tracker.core.logger import configure_logging, setup_logger

logger = setup_logger("roadmap_tracker.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    configure_logging()
    logger.info("Starting Roadmap Tracker in %s mode...", settings.ENVIRONMENT)

    coordinator = get_storage_coordinator()
    await coordinator.initialize()
    if coordinator.last_error:
        logger.warning(coordinator.last_error)

    yield

    # Shutdown
    logger.info("Shutting down Roadmap Tracker...")
    get_key_value_store().dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Roadmap Tracker",
        description="Personal roadmap planner with daily, weekly and monthly views",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RoadmapTrackerError, roadmap_tracker_error_handler)

    from roadmap_tracker.api import pomodoro, roadmaps
    from roadmap_tracker.api import settings as settings_api

    app.include_router(roadmaps.router, prefix="/api/roadmaps", tags=["roadmaps"])
    app.include_router(settings_api.router, prefix="/api/settings", tags=["settings"])
    app.include_router(pomodoro.router, prefix="/api/pomodoro", tags=["pomodoro"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
