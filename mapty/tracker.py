"""Workout tracker: keeps the collection, the map markers and the snapshot in step.

Every operation runs to completion under one lock, and every operation that
changes the collection ends by saving a full snapshot of the resulting state.
"""

import logging
import threading
from typing import Any, Callable, Protocol

from mapty.collection import WorkoutCollection
from mapty.db.kv_store import KeyValueStore
from mapty.db.snapshot import STORAGE_KEY, clear_workouts, load_workouts, save_workouts
from mapty.display import popup_content, popup_style_class
from mapty.errors import WorkoutNotFoundError
from mapty.models import (
    AnyWorkout,
    Coordinates,
    EditWorkoutForm,
    NewWorkoutForm,
    ValidationFailed,
)
from mapty.validation import build_workout, validate_edit

logger = logging.getLogger(__name__)

DEFAULT_ZOOM_LEVEL = 13


class MapView(Protocol):
    """The map the tracker draws workouts on."""

    def center_view(self, coordinates: Coordinates, zoom_level: int) -> None: ...

    def place_marker(
        self,
        workout_id: str,
        coordinates: Coordinates,
        popup_content: str,
        style_class: str,
    ) -> Any: ...

    def remove_marker(self, handle: Any) -> None: ...

    def on_map_click(self, callback: Callable[[Coordinates], None]) -> None: ...


class WorkoutTracker:
    def __init__(
        self,
        store: KeyValueStore,
        map_view: MapView,
        storage_key: str = STORAGE_KEY,
        zoom_level: int = DEFAULT_ZOOM_LEVEL,
    ):
        self.store = store
        self.map_view = map_view
        self.storage_key = storage_key
        self.zoom_level = zoom_level
        self.collection = WorkoutCollection()
        # Workout id -> handle returned by the map for that workout's marker.
        self._markers: dict[str, Any] = {}
        self._selected_location: Coordinates | None = None
        self._lock = threading.RLock()
        self._started = False

    @property
    def selected_location(self) -> Coordinates | None:
        return self._selected_location

    @property
    def show_delete_all(self) -> bool:
        """Whether the delete-all control should be offered."""
        return not self.collection.is_empty

    def start(self, initial_view: Coordinates | None = None) -> None:
        """Load the saved workouts and draw them on the map.

        The view is centered on `initial_view` when given, otherwise on the
        most recent workout. Later calls do nothing.
        """
        with self._lock:
            if self._started:
                logger.warning("Tracker already started, ignoring")
                return
            for workout in load_workouts(self.store, self.storage_key):
                self.collection.add(workout)
            self.map_view.on_map_click(self.select_location)
            workouts = self.collection.all()
            center = initial_view or (workouts[-1].coordinates if workouts else None)
            if center is not None:
                self.map_view.center_view(center, self.zoom_level)
            for workout in workouts:
                self._place_marker(workout)
            self._started = True
        logger.info(f"Tracker started with {len(workouts)} workouts")

    def select_location(self, coordinates: Coordinates) -> None:
        """Remember where the map was clicked; the next new workout goes there."""
        with self._lock:
            self._selected_location = coordinates

    def workouts(self) -> tuple[AnyWorkout, ...]:
        with self._lock:
            return self.collection.all()

    def marker_for(self, workout_id: str) -> Any:
        with self._lock:
            self._find(workout_id, "look up the marker of")
            return self._markers[workout_id]

    def create_workout(
        self, form: NewWorkoutForm, coordinates: Coordinates | None = None
    ) -> AnyWorkout | ValidationFailed:
        with self._lock:
            location = coordinates or form.coordinates or self._selected_location
            result = build_workout(form, location)
            if isinstance(result, ValidationFailed):
                return result
            self.collection.add(result)
            self._place_marker(result)
            self._selected_location = None
            self._save()
        logger.info(f"Created {result.type} workout {result.id}")
        return result

    def edit_workout(
        self, workout_id: str, form: EditWorkoutForm
    ) -> AnyWorkout | ValidationFailed:
        with self._lock:
            workout = self._find(workout_id, "edit")
            outcome = validate_edit(workout, form)
            if isinstance(outcome, ValidationFailed):
                return outcome
            updated = self.collection.update_fields(
                workout_id, outcome.changes, outcome.metric_override
            )
            self._save()
        logger.info(f"Edited workout {workout_id}")
        return updated

    def cancel_edit(self, workout_id: str) -> AnyWorkout:
        """Return the stored values so the edited fields can be put back."""
        with self._lock:
            return self._find(workout_id, "cancel editing")

    def focus_workout(self, workout_id: str) -> AnyWorkout:
        """Center the map on a workout and count the interaction."""
        with self._lock:
            workout = self._find(workout_id, "focus")
            self.map_view.center_view(workout.coordinates, self.zoom_level)
            self.collection.record_click(workout_id)
            self._save()
            return self.collection.find_by_id(workout_id)

    def delete_workout(self, workout_id: str) -> AnyWorkout:
        with self._lock:
            self._find(workout_id, "delete")
            removed = self.collection.remove_by_id(workout_id)
            self._save()
            handle = self._markers.pop(workout_id, None)
            if handle is not None:
                self.map_view.remove_marker(handle)
        logger.info(f"Deleted workout {workout_id}")
        return removed

    def delete_all(self) -> int:
        """Delete every workout, its marker and the saved snapshot."""
        with self._lock:
            for handle in self._markers.values():
                self.map_view.remove_marker(handle)
            self._markers.clear()
            removed = self.collection.remove_all()
            clear_workouts(self.store, self.storage_key)
        logger.info(f"Deleted all {len(removed)} workouts")
        return len(removed)

    def _find(self, workout_id: str, action: str) -> AnyWorkout:
        try:
            return self.collection.find_by_id(workout_id)
        except WorkoutNotFoundError:
            logger.warning(f"Cannot {action} workout {workout_id}: not found")
            raise

    def _place_marker(self, workout: AnyWorkout) -> None:
        self._markers[workout.id] = self.map_view.place_marker(
            workout.id,
            workout.coordinates,
            popup_content(workout),
            popup_style_class(workout),
        )

    def _save(self) -> None:
        save_workouts(self.collection.all(), self.store, self.storage_key)
