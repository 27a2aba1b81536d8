# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401
from .env_loader import Settings, get_current_environment, get_settings

import os
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from mapty.db.connection import get_kv_store
from mapty.map_view import InMemoryMapView
from mapty.tracker import WorkoutTracker
from .models import EnvironmentResponse
from .routers import map_router, workouts_router

"""FastAPI application setup for the workout tracker.

Exposes routes for listing, creating, editing and deleting workouts and for
the map the workouts are drawn on. This module configures CORS and logging
and wires one tracker per app.
"""

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Configure the logging for the tracker itself if the user specifies it.
    if "LOG_LEVEL" in os.environ:
        match os.environ["LOG_LEVEL"].upper():
            case "DEBUG":
                log_level = logging.DEBUG
            case "INFO":
                log_level = logging.INFO
            case "WARNING":
                log_level = logging.WARNING
            case "ERROR":
                log_level = logging.ERROR
            case "CRITICAL":
                log_level = logging.CRITICAL
            case _:
                raise ValueError(f"Invalid log level: {os.environ['LOG_LEVEL']}")
        logging.getLogger("mapty").setLevel(log_level)


def build_tracker(
    settings: Settings, map_view: InMemoryMapView
) -> WorkoutTracker:
    """Create a tracker backed by the configured storage file."""
    return WorkoutTracker(
        store=get_kv_store(settings.storage_path),
        map_view=map_view,
        storage_key=settings.storage_key,
        zoom_level=settings.map_zoom_level,
    )


def create_app(
    tracker: WorkoutTracker | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create the app.

    With no tracker given, one is built from settings and started when the
    app starts up. A given tracker is started immediately; its map view must
    be an `InMemoryMapView` so the map routes can read it.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not hasattr(app.state, "tracker"):
            map_view = InMemoryMapView()
            app.state.map_view = map_view
            app.state.tracker = build_tracker(settings, map_view)
            app.state.tracker.start()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    if tracker is not None:
        app.state.map_view = tracker.map_view
        app.state.tracker = tracker
        tracker.start()

    app.include_router(workouts_router)
    app.include_router(map_router)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check(response: Response) -> dict[str, str]:
        """Health check endpoint that returns 200 status with CORS from anywhere."""
        response.headers["Access-Control-Allow-Origin"] = "*"
        return {"status": "healthy"}

    @app.get("/environment", response_model=EnvironmentResponse)
    def get_environment() -> EnvironmentResponse:
        """Get the current environment configuration."""
        return EnvironmentResponse(environment=get_current_environment())

    return app


configure_logging()
app = create_app()
