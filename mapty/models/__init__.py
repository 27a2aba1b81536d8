from .workout import (
    Workout,
    Running,
    Cycling,
    AnyWorkout,
    WorkoutType,
    Coordinates,
    create_running,
    create_cycling,
    generate_workout_id,
)
from .metrics import calc_pace, calc_speed, recompute_pace, recompute_speed
from .forms import (
    NewWorkoutForm,
    EditWorkoutForm,
    ValidationFailed,
    WorkoutEdit,
    coerce_number,
)

__all__ = [
    "Workout",
    "Running",
    "Cycling",
    "AnyWorkout",
    "WorkoutType",
    "Coordinates",
    "create_running",
    "create_cycling",
    "generate_workout_id",
    "calc_pace",
    "calc_speed",
    "recompute_pace",
    "recompute_speed",
    "NewWorkoutForm",
    "EditWorkoutForm",
    "ValidationFailed",
    "WorkoutEdit",
    "coerce_number",
]
