"""Validation of submitted workout values for create and edit.

Both entry points return `ValidationFailed` instead of raising, so a bad
submission never reaches the collection.
"""

import logging
import math

from mapty.models import (
    AnyWorkout,
    Coordinates,
    EditWorkoutForm,
    NewWorkoutForm,
    ValidationFailed,
    WorkoutEdit,
    coerce_number,
    create_cycling,
    create_running,
)

logger = logging.getLogger(__name__)

# Form field name -> lower bound and whether the bound itself is allowed.
_POSITIVE = (0.0, False)
_NON_NEGATIVE = (0.0, True)
FIELD_BOUNDS: dict[str, tuple[float, bool]] = {
    "distance": _POSITIVE,
    "duration": _POSITIVE,
    "cadence": _POSITIVE,
    "pace": _POSITIVE,
    "speed": _POSITIVE,
    "elevation_gain": _NON_NEGATIVE,
}

# Fields each variant accepts on edit, derived metric last.
EDITABLE_FIELDS: dict[str, tuple[str, ...]] = {
    "running": ("distance", "duration", "cadence", "pace"),
    "cycling": ("distance", "duration", "elevation_gain", "speed"),
}


def _check_fields(values: dict[str, float]) -> list[str]:
    """Return one error message per value that is not finite or out of bounds."""
    errors = []
    for name, value in values.items():
        label = name.replace("_", " ")
        if not math.isfinite(value):
            errors.append(f"{label} must be a finite number")
            continue
        bound, inclusive = FIELD_BOUNDS[name]
        if value < bound or (value == bound and not inclusive):
            comparison = "at least" if inclusive else "greater than"
            errors.append(f"{label} must be {comparison} {bound:g}")
        elif name == "cadence" and not value.is_integer():
            errors.append(f"{label} must be a whole number")
    return errors


def build_workout(
    form: NewWorkoutForm, coordinates: Coordinates | None
) -> AnyWorkout | ValidationFailed:
    """Validate a create form and build the workout it describes.

    Running needs distance, duration and cadence above zero. Cycling needs
    distance and duration above zero and an elevation gain of zero or more.
    """
    extra_field = "cadence" if form.type == "running" else "elevation_gain"
    values = {
        "distance": coerce_number(form.distance),
        "duration": coerce_number(form.duration),
        extra_field: coerce_number(getattr(form, extra_field)),
    }
    errors = _check_fields(values)
    if coordinates is None:
        errors.append("select a location on the map before adding a workout")
        logger.info(f"Rejected new {form.type} workout: {errors}")
        return ValidationFailed(errors=errors)
    if errors:
        logger.info(f"Rejected new {form.type} workout: {errors}")
        return ValidationFailed(errors=errors)

    if form.type == "running":
        return create_running(
            coordinates,
            values["distance"],
            values["duration"],
            int(values["cadence"]),
        )
    return create_cycling(
        coordinates,
        values["distance"],
        values["duration"],
        values["elevation_gain"],
    )


def validate_edit(
    workout: AnyWorkout, form: EditWorkoutForm
) -> WorkoutEdit | ValidationFailed:
    """Validate an inline edit of `workout`.

    Only the workout's own variant fields are read from the form. If the
    submitted pace (or speed) equals the stored value exactly, the metric is
    recomputed from the new distance and duration; any other value is kept
    as a manual override.
    """
    submitted: dict[str, float] = {}
    for name in EDITABLE_FIELDS[workout.type]:
        raw = getattr(form, name)
        if raw is None:
            submitted[name] = float(getattr(workout, name))
        else:
            submitted[name] = coerce_number(raw)

    errors = _check_fields(submitted)
    if errors:
        logger.info(f"Rejected edit of workout {workout.id}: {errors}")
        return ValidationFailed(errors=errors)

    metric = submitted.pop(workout.metric_field)
    if workout.extra_field == "cadence":
        submitted["cadence"] = int(submitted["cadence"])
    override = None if metric == workout.metric else metric
    return WorkoutEdit(changes=submitted, metric_override=override)
