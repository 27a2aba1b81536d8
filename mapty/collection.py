"""In-memory collection of workouts, the single source of truth for workout state."""

import logging
from typing import Any, Iterable, Iterator, Mapping

from mapty.errors import (
    DuplicateWorkoutIdError,
    UneditableFieldError,
    WorkoutNotFoundError,
)
from mapty.models import AnyWorkout

logger = logging.getLogger(__name__)


class WorkoutCollection:
    """Ordered workouts, kept in insertion order with unique ids.

    Workouts handed out by this class are copies, so the only way to change
    a stored workout is through `update_fields` or `record_click`.
    """

    def __init__(self, workouts: Iterable[AnyWorkout] = ()):
        self._workouts: list[AnyWorkout] = []
        for workout in workouts:
            self.add(workout)

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[AnyWorkout]:
        return iter(self.all())

    def __contains__(self, workout_id: object) -> bool:
        return any(w.id == workout_id for w in self._workouts)

    @property
    def is_empty(self) -> bool:
        return not self._workouts

    def add(self, workout: AnyWorkout) -> None:
        """Append a workout. Raises `DuplicateWorkoutIdError` if the id is taken."""
        if workout.id in self:
            raise DuplicateWorkoutIdError(workout.id)
        self._workouts.append(workout.model_copy(deep=True))

    def index_of(self, workout_id: str) -> int:
        for index, workout in enumerate(self._workouts):
            if workout.id == workout_id:
                return index
        raise WorkoutNotFoundError(workout_id)

    def find_by_id(self, workout_id: str) -> AnyWorkout:
        return self._workouts[self.index_of(workout_id)].model_copy(deep=True)

    def remove_by_id(self, workout_id: str) -> AnyWorkout:
        """Remove a workout and return it.

        This only touches the collection; saving the snapshot and removing the
        map marker are up to the caller.
        """
        return self._workouts.pop(self.index_of(workout_id))

    def remove_all(self) -> list[AnyWorkout]:
        removed, self._workouts = self._workouts, []
        return removed

    def update_fields(
        self,
        workout_id: str,
        changes: Mapping[str, Any],
        metric_override: float | None = None,
    ) -> AnyWorkout:
        """Apply already-validated field changes to a workout.

        The derived metric (pace or speed) is recomputed from the new distance
        and duration, unless `metric_override` is given, in which case it is
        stored as-is. The stored workout is replaced only after every change
        validates, so a failed update leaves it untouched.

        Only distance, duration and the variant's own field can change; any
        other key raises `UneditableFieldError`.
        """
        index = self.index_of(workout_id)
        current = self._workouts[index]
        editable = {"distance", "duration", current.extra_field}
        rejected = sorted(set(changes) - editable)
        if rejected:
            raise UneditableFieldError(workout_id, rejected)
        data = current.model_dump(exclude={"description"})
        data.update(changes)
        updated = type(current).model_validate(data)
        if metric_override is None:
            updated.recompute_metric()
        else:
            setattr(updated, updated.metric_field, metric_override)
        self._workouts[index] = updated
        logger.debug(f"Updated workout {workout_id}: {sorted(changes)}")
        return updated.model_copy(deep=True)

    def record_click(self, workout_id: str) -> int:
        """Count one user focus interaction on a workout."""
        workout = self._workouts[self.index_of(workout_id)]
        workout.click()
        return workout.interaction_count

    def all(self) -> tuple[AnyWorkout, ...]:
        return tuple(w.model_copy(deep=True) for w in self._workouts)
