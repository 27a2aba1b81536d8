"""Derived metrics for workouts.

Pace is minutes per kilometer, speed is kilometers per hour.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from mapty.errors import InvalidMetricInputError

if TYPE_CHECKING:
    from .workout import Running, Cycling


def _check_inputs(distance: float, duration: float) -> None:
    for name, value in (("distance", distance), ("duration", duration)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidMetricInputError(
                f"{name} must be a positive finite number, got {value!r}"
            )


def calc_pace(distance: float, duration: float) -> float:
    """Minutes per kilometer."""
    _check_inputs(distance, duration)
    return duration / distance


def calc_speed(distance: float, duration: float) -> float:
    """Kilometers per hour, with duration given in minutes."""
    _check_inputs(distance, duration)
    return distance / (duration / 60)


def recompute_pace(workout: Running) -> float:
    """Set `workout.pace` from its current distance and duration."""
    workout.pace = calc_pace(workout.distance, workout.duration)
    return workout.pace


def recompute_speed(workout: Cycling) -> float:
    """Set `workout.speed` from its current distance and duration."""
    workout.speed = calc_speed(workout.distance, workout.duration)
    return workout.speed
