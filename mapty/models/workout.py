from __future__ import annotations
from datetime import datetime
from typing import Annotated, ClassVar, Literal
import threading
import time

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .metrics import calc_pace, calc_speed, recompute_pace, recompute_speed


WorkoutType = Literal["running", "cycling"]
Coordinates = tuple[float, float]  # (lat, lng)

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_id_lock = threading.Lock()
_last_id_ns = 0


def generate_workout_id() -> str:
    """Generate a workout id from the current time in nanoseconds.

    Ids are strictly increasing within the process, so two workouts created
    within the same clock tick still get distinct ids.
    """
    global _last_id_ns
    with _id_lock:
        now_ns = time.time_ns()
        if now_ns <= _last_id_ns:
            now_ns = _last_id_ns + 1
        _last_id_ns = now_ns
    return str(now_ns)


def _now_local() -> datetime:
    return datetime.now().astimezone()


class Workout(BaseModel):
    """Fields shared by every workout variant."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_workout_id, frozen=True)
    created_at: datetime = Field(default_factory=_now_local, frozen=True)
    coordinates: Coordinates = Field(frozen=True)
    type: WorkoutType = Field(frozen=True)
    distance: float = Field(gt=0)  # in km
    duration: float = Field(gt=0)  # in minutes
    interaction_count: int = Field(default=0, ge=0)

    metric_field: ClassVar[str]
    extra_field: ClassVar[str]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def description(self) -> str:
        """Display label, e.g. "Running on April 14" (local calendar date)."""
        local = self.created_at.astimezone()
        return f"{self.type.capitalize()} on {MONTHS[local.month - 1]} {local.day}"

    @property
    def metric(self) -> float:
        return getattr(self, self.metric_field)

    @property
    def extra(self) -> float:
        return getattr(self, self.extra_field)

    def recompute_metric(self) -> float:
        raise NotImplementedError

    def click(self) -> None:
        self.interaction_count += 1


class Running(Workout):
    type: Literal["running"] = Field(default="running", frozen=True)
    cadence: int = Field(gt=0)  # steps per minute
    pace: float = Field(gt=0)  # min/km

    metric_field: ClassVar[str] = "pace"
    extra_field: ClassVar[str] = "cadence"

    def recompute_metric(self) -> float:
        return recompute_pace(self)


class Cycling(Workout):
    type: Literal["cycling"] = Field(default="cycling", frozen=True)
    elevation_gain: float = Field(ge=0)  # in meters
    speed: float = Field(gt=0)  # km/h

    metric_field: ClassVar[str] = "speed"
    extra_field: ClassVar[str] = "elevation_gain"

    def recompute_metric(self) -> float:
        return recompute_speed(self)


AnyWorkout = Annotated[Running | Cycling, Field(discriminator="type")]


def create_running(
    coordinates: Coordinates,
    distance: float,
    duration: float,
    cadence: int,
    created_at: datetime | None = None,
) -> Running:
    """Create a running workout with its pace already computed."""
    extra = {} if created_at is None else {"created_at": created_at}
    return Running(
        coordinates=coordinates,
        distance=distance,
        duration=duration,
        cadence=cadence,
        pace=calc_pace(distance, duration),
        **extra,
    )


def create_cycling(
    coordinates: Coordinates,
    distance: float,
    duration: float,
    elevation_gain: float,
    created_at: datetime | None = None,
) -> Cycling:
    """Create a cycling workout with its speed already computed."""
    extra = {} if created_at is None else {"created_at": created_at}
    return Cycling(
        coordinates=coordinates,
        distance=distance,
        duration=duration,
        elevation_gain=elevation_gain,
        speed=calc_speed(distance, duration),
        **extra,
    )
