"""Submitted form values and the outcome of validating them."""

from __future__ import annotations
import math
from typing import Any

from pydantic import BaseModel, Field

from .workout import Coordinates, WorkoutType

# Form inputs arrive as text from the browser, or as numbers from API clients.
FormValue = str | float | int | None


def coerce_number(value: FormValue) -> float:
    """Convert a form value to a float the way a browser's unary `+` does.

    Blank input becomes 0.0 and unparsable input becomes NaN, so callers can
    reject both through the same finiteness and positivity checks.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip()
    if not text:
        return 0.0
    # float() accepts digit separators, a browser does not.
    if "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


class NewWorkoutForm(BaseModel):
    """Values submitted when creating a workout."""

    type: WorkoutType
    distance: FormValue = ""
    duration: FormValue = ""
    cadence: FormValue = ""
    elevation_gain: FormValue = ""
    # When omitted, the location last clicked on the map is used.
    coordinates: Coordinates | None = None


class EditWorkoutForm(BaseModel):
    """Values submitted when editing a workout inline.

    A field left as None keeps its stored value.
    """

    distance: FormValue = None
    duration: FormValue = None
    pace: FormValue = None
    speed: FormValue = None
    cadence: FormValue = None
    elevation_gain: FormValue = None


class ValidationFailed(BaseModel):
    """Returned instead of a workout when submitted values are rejected."""

    errors: list[str] = Field(default_factory=list)


class WorkoutEdit(BaseModel):
    """An accepted edit, ready to be applied by the collection."""

    changes: dict[str, Any]
    # None means the derived metric is recomputed from distance and duration.
    metric_override: float | None = None
