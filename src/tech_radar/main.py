"""FastAPI application hosting the analysis API and the background worker."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from tech_radar.ai.client import GeminiTextGenerator, TextGenerator
from tech_radar.api import analyze_router, notifications_router, system_router
from tech_radar.core.config import settings
from tech_radar.core.database import init_db, close_db
from tech_radar.core.error_handling import RadarError, error_handler, http_status_for
from tech_radar.core.logging import configure_logging
from tech_radar.workers.radar_worker import RadarWorker

logger = structlog.get_logger(__name__)


def build_worker(generator: Optional[TextGenerator] = None) -> RadarWorker:
    """Create the radar worker with the configured AI collaborator."""
    return RadarWorker(generator=generator or GeminiTextGenerator())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the store and run the worker for the lifetime of the app."""
    configure_logging()
    init_db()

    worker = None
    if settings.worker_enabled:
        worker = build_worker()
        worker.start()
    else:
        logger.info("Background worker disabled by configuration")
    app.state.worker = worker

    try:
        yield
    finally:
        if worker is not None:
            await worker.stop()
        close_db()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title="Tech Radar API",
        description="CV analysis queue producing personal technology radars",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.worker = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(analyze_router)
    app.include_router(notifications_router)

    @app.exception_handler(RadarError)
    async def radar_error_handler(request: Request, exc: RadarError):
        error_handler.handle_error(exc)
        return JSONResponse(status_code=http_status_for(exc), content={"error": exc.message})

    return app


app = create_app()
