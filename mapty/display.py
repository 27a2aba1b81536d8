"""Display helpers shared by the map markers and the workout list."""

from decimal import Decimal, ROUND_HALF_UP

from mapty.models import AnyWorkout, WorkoutType

WORKOUT_ICONS: dict[WorkoutType, str] = {
    "running": "\U0001f3c3\u200d\u2642\ufe0f",
    "cycling": "\U0001f6b4",
}

UNITS: dict[str, str] = {
    "distance": "km",
    "duration": "min",
    "pace": "min/km",
    "speed": "km/h",
    "cadence": "spm",
    "elevation_gain": "m",
}


def popup_content(workout: AnyWorkout) -> str:
    return f"{WORKOUT_ICONS[workout.type]} {workout.description}"


def popup_style_class(workout: AnyWorkout) -> str:
    return f"{workout.type}-popup"


def format_one_decimal(value: float) -> str:
    """Format with one decimal, rounding halves up like JavaScript's toFixed(1)."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
