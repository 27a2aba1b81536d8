"""Save and load the full workout list as one JSON snapshot.

A snapshot is a JSON array of flat records stored under a single key:

    [{"id": "...", "date": "2024-04-14T09:30:00+00:00", "coords": [1.0, 1.0],
      "distance": 5.0, "duration": 25.0, "type": "running", "cadence": 180,
      "pace": 5.0, "description": "Running on April 14", "clicks": 0}, ...]

Records carry no behavior, so each one is rebuilt into the workout class
named by its `type` before it is used again.
"""

from __future__ import annotations
import json
import logging
from datetime import datetime
from typing import Any, Iterable, Literal, Self

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from mapty.errors import CorruptSnapshotError, InvalidMetricInputError
from mapty.models import (
    AnyWorkout,
    Coordinates,
    Cycling,
    Running,
    calc_pace,
    calc_speed,
)
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"


class _WorkoutRecord(BaseModel):
    """Fields every record must have, under their stored names."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: datetime = Field(
        serialization_alias="date",
        validation_alias=AliasChoices("date", "createdAt", "created_at"),
    )
    coordinates: Coordinates = Field(
        serialization_alias="coords",
        validation_alias=AliasChoices("coords", "coordinates"),
    )
    distance: float
    duration: float
    # Always recomputed from created_at on load; stored for readers of the raw file.
    description: str | None = None
    interaction_count: int = Field(
        default=0,
        serialization_alias="clicks",
        validation_alias=AliasChoices("clicks", "interactionCount", "interaction_count"),
    )

    def _common_fields(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at,
            "coordinates": self.coordinates,
            "distance": self.distance,
            "duration": self.duration,
            "interaction_count": self.interaction_count,
        }


class RunningRecord(_WorkoutRecord):
    type: Literal["running"] = Field(
        default="running", validation_alias=AliasChoices("type", "variantKind")
    )
    cadence: int
    pace: float | None = None

    def to_workout(self) -> Running:
        pace = self.pace
        if pace is None:
            pace = calc_pace(self.distance, self.duration)
        return Running(**self._common_fields(), cadence=self.cadence, pace=pace)

    @classmethod
    def from_workout(cls, workout: Running) -> Self:
        return cls(
            id=workout.id,
            created_at=workout.created_at,
            coordinates=workout.coordinates,
            distance=workout.distance,
            duration=workout.duration,
            description=workout.description,
            interaction_count=workout.interaction_count,
            cadence=workout.cadence,
            pace=workout.pace,
        )


class CyclingRecord(_WorkoutRecord):
    type: Literal["cycling"] = Field(
        default="cycling", validation_alias=AliasChoices("type", "variantKind")
    )
    elevation_gain: float = Field(
        serialization_alias="elevationGain",
        validation_alias=AliasChoices("elevationGain", "elevation_gain"),
    )
    speed: float | None = None

    def to_workout(self) -> Cycling:
        speed = self.speed
        if speed is None:
            speed = calc_speed(self.distance, self.duration)
        return Cycling(
            **self._common_fields(), elevation_gain=self.elevation_gain, speed=speed
        )

    @classmethod
    def from_workout(cls, workout: Cycling) -> Self:
        return cls(
            id=workout.id,
            created_at=workout.created_at,
            coordinates=workout.coordinates,
            distance=workout.distance,
            duration=workout.duration,
            description=workout.description,
            interaction_count=workout.interaction_count,
            elevation_gain=workout.elevation_gain,
            speed=workout.speed,
        )


RECORD_TYPES: dict[str, type[RunningRecord] | type[CyclingRecord]] = {
    "running": RunningRecord,
    "cycling": CyclingRecord,
}


def encode_workout(workout: AnyWorkout) -> dict[str, Any]:
    """Flatten a workout into its stored record."""
    if isinstance(workout, Running):
        record: RunningRecord | CyclingRecord = RunningRecord.from_workout(workout)
    else:
        record = CyclingRecord.from_workout(workout)
    return record.model_dump(mode="json", by_alias=True)


def decode_record(raw: Any) -> AnyWorkout:
    """Rebuild a workout from a stored record.

    Raises:
        CorruptSnapshotError: If the record has an unknown type, or a
            mandatory field is missing or invalid.
    """
    if not isinstance(raw, dict):
        raise CorruptSnapshotError(f"Record is not an object: {raw!r}")
    kind = raw.get("type", raw.get("variantKind"))
    record_type = RECORD_TYPES.get(kind) if isinstance(kind, str) else None
    if record_type is None:
        raise CorruptSnapshotError(f"Unknown workout type: {kind!r}")
    try:
        return record_type.model_validate(raw).to_workout()
    except (ValidationError, InvalidMetricInputError) as e:
        raise CorruptSnapshotError(
            f"Invalid {kind} record {raw.get('id')!r}: {e}"
        ) from e


def save_workouts(
    workouts: Iterable[AnyWorkout], store: KeyValueStore, key: str = STORAGE_KEY
) -> None:
    """Write the full workout list under `key`, replacing any earlier snapshot."""
    records = [encode_workout(workout) for workout in workouts]
    store.set(key, json.dumps(records))
    logger.debug(f"Saved snapshot of {len(records)} workouts under '{key}'")


def load_workouts(store: KeyValueStore, key: str = STORAGE_KEY) -> list[AnyWorkout]:
    """Read the snapshot under `key` and rebuild its workouts in order.

    A missing snapshot yields an empty list. A record that cannot be rebuilt
    is dropped with a warning and the remaining records are still loaded.
    """
    raw = store.get(key)
    if raw is None:
        return []
    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Snapshot under '{key}' is not valid JSON, ignoring it: {e}")
        return []
    if not isinstance(records, list):
        logger.error(f"Snapshot under '{key}' is not a JSON array, ignoring it")
        return []

    workouts: list[AnyWorkout] = []
    seen_ids: set[str] = set()
    for position, record in enumerate(records):
        try:
            workout = decode_record(record)
            if workout.id in seen_ids:
                raise CorruptSnapshotError(f"Duplicate workout ID {workout.id!r}")
        except CorruptSnapshotError as e:
            logger.warning(f"Dropping snapshot record {position}: {e}")
            continue
        seen_ids.add(workout.id)
        workouts.append(workout)

    logger.info(f"Loaded {len(workouts)} of {len(records)} workouts from '{key}'")
    return workouts


def clear_workouts(store: KeyValueStore, key: str = STORAGE_KEY) -> None:
    """Remove the snapshot entirely."""
    store.remove(key)
    logger.debug(f"Removed snapshot under '{key}'")
