import logging

from fastapi import Request

from mapty.map_view import InMemoryMapView
from mapty.tracker import WorkoutTracker
from .env_loader import Settings

logger = logging.getLogger(__name__)


def get_tracker(request: Request) -> WorkoutTracker:
    """Get the tracker created at app startup."""
    return request.app.state.tracker


def get_map_view(request: Request) -> InMemoryMapView:
    return request.app.state.map_view


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
