"""Exceptions raised by the workout core.

Validation failures are not exceptions; see `mapty.models.forms.ValidationFailed`.
"""


class WorkoutNotFoundError(KeyError):
    """An operation referenced a workout id that is not in the collection."""

    def __init__(self, workout_id: str):
        super().__init__(workout_id)
        self.workout_id = workout_id

    def __str__(self) -> str:
        return f"Workout with ID '{self.workout_id}' not found"


class DuplicateWorkoutIdError(ValueError):
    """A workout with the same id is already in the collection."""

    def __init__(self, workout_id: str):
        super().__init__(f"Workout with ID '{workout_id}' already exists")
        self.workout_id = workout_id


class InvalidMetricInputError(ValueError):
    """Distance or duration is not a positive finite number."""


class CorruptSnapshotError(ValueError):
    """A persisted workout record cannot be turned back into a workout."""


class UneditableFieldError(ValueError):
    """An update tried to change a field that is fixed once a workout exists."""

    def __init__(self, workout_id: str, fields: list[str]):
        super().__init__(
            f"Cannot change {', '.join(fields)} of workout with ID '{workout_id}'"
        )
        self.workout_id = workout_id
        self.fields = fields
