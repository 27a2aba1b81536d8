"""Workout list, create, edit and delete routes."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status

from mapty.errors import WorkoutNotFoundError
from mapty.models import EditWorkoutForm, NewWorkoutForm, ValidationFailed
from mapty.tracker import WorkoutTracker
from mapty.app.dependencies import get_app_settings, get_tracker
from mapty.app.env_loader import Settings
from mapty.app.models import ValidationErrorDetail, WorkoutControls, WorkoutView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _not_found(workout_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Workout with ID '{workout_id}' not found",
    )


def _rejected(failure: ValidationFailed, settings: Settings) -> HTTPException:
    detail = ValidationErrorDetail(
        errors=failure.errors, banner_seconds=settings.error_banner_seconds
    )
    return HTTPException(
        status_code=422,
        detail=detail.model_dump(),
    )


@router.get("", response_model=list[WorkoutView])
def read_workouts(
    sort_order: Literal["asc", "desc"] = "desc",
    tracker: WorkoutTracker = Depends(get_tracker),
) -> list[WorkoutView]:
    """Get all workouts.

    Args:
        sort_order: "desc" lists the newest workout first, as the sidebar shows
            them; "asc" lists them in the order they were created.
    """
    views = [WorkoutView.from_workout(w) for w in tracker.workouts()]
    if sort_order == "desc":
        views.reverse()
    return views


@router.get("/controls", response_model=WorkoutControls)
def read_controls(tracker: WorkoutTracker = Depends(get_tracker)) -> WorkoutControls:
    return WorkoutControls(show_delete_all=tracker.show_delete_all)


@router.post("", response_model=WorkoutView, status_code=status.HTTP_201_CREATED)
def create_workout(
    form: NewWorkoutForm,
    tracker: WorkoutTracker = Depends(get_tracker),
    settings: Settings = Depends(get_app_settings),
) -> WorkoutView:
    """Create a workout at the submitted coordinates, or at the last map click."""
    result = tracker.create_workout(form)
    if isinstance(result, ValidationFailed):
        raise _rejected(result, settings)
    return WorkoutView.from_workout(result)


@router.patch("/{workout_id}", response_model=WorkoutView)
def edit_workout(
    workout_id: str,
    form: EditWorkoutForm,
    tracker: WorkoutTracker = Depends(get_tracker),
    settings: Settings = Depends(get_app_settings),
) -> WorkoutView:
    """Apply an inline edit.

    Resubmitting the stored pace (or speed) recomputes it from distance and
    duration; submitting a different value stores that value as given.
    """
    try:
        result = tracker.edit_workout(workout_id, form)
    except WorkoutNotFoundError:
        raise _not_found(workout_id)
    if isinstance(result, ValidationFailed):
        raise _rejected(result, settings)
    return WorkoutView.from_workout(result)


@router.post("/{workout_id}/cancel-edit", response_model=WorkoutView)
def cancel_edit(
    workout_id: str, tracker: WorkoutTracker = Depends(get_tracker)
) -> WorkoutView:
    """Get the stored values to put back into the fields being edited."""
    try:
        return WorkoutView.from_workout(tracker.cancel_edit(workout_id))
    except WorkoutNotFoundError:
        raise _not_found(workout_id)


@router.post("/{workout_id}/focus", response_model=WorkoutView)
def focus_workout(
    workout_id: str, tracker: WorkoutTracker = Depends(get_tracker)
) -> WorkoutView:
    """Move the map to a workout."""
    try:
        return WorkoutView.from_workout(tracker.focus_workout(workout_id))
    except WorkoutNotFoundError:
        raise _not_found(workout_id)


@router.delete("/{workout_id}", response_model=dict[str, str])
def delete_workout(
    workout_id: str, tracker: WorkoutTracker = Depends(get_tracker)
) -> dict[str, str]:
    try:
        removed = tracker.delete_workout(workout_id)
    except WorkoutNotFoundError:
        raise _not_found(workout_id)
    return {"message": f"Workout '{removed.description}' has been deleted"}


@router.delete("", response_model=dict[str, int])
def delete_all_workouts(tracker: WorkoutTracker = Depends(get_tracker)) -> dict[str, int]:
    return {"deleted": tracker.delete_all()}
