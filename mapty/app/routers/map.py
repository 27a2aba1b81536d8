"""Map click and map state routes."""

from fastapi import APIRouter, Depends

from mapty.map_view import InMemoryMapView
from mapty.tracker import WorkoutTracker
from mapty.app.dependencies import get_map_view, get_tracker
from mapty.app.models import MapClickRequest, MapState

router = APIRouter(prefix="/map", tags=["map"])


@router.get("", response_model=MapState)
def read_map(
    map_view: InMemoryMapView = Depends(get_map_view),
    tracker: WorkoutTracker = Depends(get_tracker),
) -> MapState:
    """Get the current view and every workout marker to draw."""
    return MapState(
        center=map_view.center,
        zoom_level=map_view.zoom_level,
        selected_location=tracker.selected_location,
        markers=map_view.markers,
    )


@router.post("/click", response_model=MapState)
def click_map(
    request: MapClickRequest,
    map_view: InMemoryMapView = Depends(get_map_view),
    tracker: WorkoutTracker = Depends(get_tracker),
) -> MapState:
    """Report a click on the map; the next new workout is placed there."""
    map_view.click((request.lat, request.lng))
    return read_map(map_view=map_view, tracker=tracker)
