"""In-process map that records view and marker state for a browser to draw."""

import itertools
import logging
from typing import Callable

from pydantic import BaseModel

from mapty.models import Coordinates

logger = logging.getLogger(__name__)


class Marker(BaseModel):
    handle: int
    workout_id: str
    coordinates: Coordinates
    popup_content: str
    style_class: str


class InMemoryMapView:
    """Map state kept in memory.

    Markers are addressed by integer handles that are never reused, so a
    stale handle can never remove someone else's marker.
    """

    def __init__(self) -> None:
        self.center: Coordinates | None = None
        self.zoom_level: int | None = None
        self._markers: dict[int, Marker] = {}
        self._handles = itertools.count(1)
        self._click_callbacks: list[Callable[[Coordinates], None]] = []

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers.values())

    def center_view(self, coordinates: Coordinates, zoom_level: int) -> None:
        self.center = coordinates
        self.zoom_level = zoom_level

    def place_marker(
        self,
        workout_id: str,
        coordinates: Coordinates,
        popup_content: str,
        style_class: str,
    ) -> int:
        handle = next(self._handles)
        self._markers[handle] = Marker(
            handle=handle,
            workout_id=workout_id,
            coordinates=coordinates,
            popup_content=popup_content,
            style_class=style_class,
        )
        return handle

    def remove_marker(self, handle: int) -> None:
        if self._markers.pop(handle, None) is None:
            logger.warning(f"Tried to remove unknown marker {handle}")

    def on_map_click(self, callback: Callable[[Coordinates], None]) -> None:
        self._click_callbacks.append(callback)

    def click(self, coordinates: Coordinates) -> None:
        """Report a click on the map at `coordinates` to every subscriber."""
        for callback in self._click_callbacks:
            callback(coordinates)
