from typing import Self

from pydantic import BaseModel

from mapty.display import UNITS, WORKOUT_ICONS, format_one_decimal
from mapty.map_view import Marker
from mapty.models import AnyWorkout, Coordinates, WorkoutType

from .env_loader import EnvironmentName


class WorkoutView(BaseModel):
    """Display fields for one workout in the sidebar list."""

    id: str
    type: WorkoutType
    description: str
    icon: str
    distance: float
    distance_unit: str
    duration: float
    duration_unit: str
    metric_name: str  # "pace" or "speed"
    metric_value: str  # one decimal place
    metric_unit: str
    extra_name: str  # "cadence" or "elevation_gain"
    extra_value: float
    extra_unit: str
    interaction_count: int

    @classmethod
    def from_workout(cls, workout: AnyWorkout) -> Self:
        return cls(
            id=workout.id,
            type=workout.type,
            description=workout.description,
            icon=WORKOUT_ICONS[workout.type],
            distance=workout.distance,
            distance_unit=UNITS["distance"],
            duration=workout.duration,
            duration_unit=UNITS["duration"],
            metric_name=workout.metric_field,
            metric_value=format_one_decimal(workout.metric),
            metric_unit=UNITS[workout.metric_field],
            extra_name=workout.extra_field,
            extra_value=workout.extra,
            extra_unit=UNITS[workout.extra_field],
            interaction_count=workout.interaction_count,
        )


class WorkoutControls(BaseModel):
    """Which list-level controls the frontend should show."""

    show_delete_all: bool


class ValidationErrorDetail(BaseModel):
    """Body detail returned when submitted values are rejected."""

    errors: list[str]
    banner_seconds: float


class MapClickRequest(BaseModel):
    lat: float
    lng: float


class MapState(BaseModel):
    center: Coordinates | None
    zoom_level: int | None
    selected_location: Coordinates | None
    markers: list[Marker]


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
