"""Tests for the in-memory workout collection."""

import pytest
from pydantic import ValidationError

from mapty.collection import WorkoutCollection
from mapty.errors import (
    DuplicateWorkoutIdError,
    UneditableFieldError,
    WorkoutNotFoundError,
)
from tests._factories import RunningFactory, CyclingFactory


class TestAddAndFind:
    def test_preserves_insertion_order(self, running_factory, cycling_factory):
        workouts = [running_factory.make(), cycling_factory.make(), running_factory.make()]
        collection = WorkoutCollection(workouts)
        assert [w.id for w in collection.all()] == [w.id for w in workouts]
        assert len(collection) == 3

    def test_duplicate_id_is_rejected(self, running_factory: RunningFactory):
        run = running_factory.make()
        collection = WorkoutCollection([run])
        with pytest.raises(DuplicateWorkoutIdError):
            collection.add(run)
        assert len(collection) == 1

    def test_find_by_id(self, running_factory, cycling_factory):
        run, ride = running_factory.make(), cycling_factory.make()
        collection = WorkoutCollection([run, ride])
        assert collection.find_by_id(ride.id) == ride
        assert collection.index_of(ride.id) == 1

    def test_find_missing_raises_not_found(self, running_factory):
        collection = WorkoutCollection([running_factory.make()])
        with pytest.raises(WorkoutNotFoundError):
            collection.find_by_id("missing")
        with pytest.raises(WorkoutNotFoundError):
            collection.index_of("missing")

    def test_returned_workouts_are_copies(self, running_factory):
        run = running_factory.make()
        collection = WorkoutCollection([run])
        found = collection.find_by_id(run.id)
        found.distance = 99
        collection.all()[0].distance = 99
        run.distance = 99
        assert collection.find_by_id(run.id).distance == 5.0


class TestRemove:
    def test_remove_by_id(self, running_factory, cycling_factory):
        first, middle, last = (
            running_factory.make(),
            cycling_factory.make(),
            running_factory.make(),
        )
        collection = WorkoutCollection([first, middle, last])
        removed = collection.remove_by_id(middle.id)
        assert removed.id == middle.id
        assert [w.id for w in collection.all()] == [first.id, last.id]

    def test_remove_missing_leaves_collection_unchanged(self, running_factory):
        workouts = [running_factory.make(), running_factory.make()]
        collection = WorkoutCollection(workouts)
        with pytest.raises(WorkoutNotFoundError):
            collection.remove_by_id("missing")
        assert collection.all() == tuple(workouts)

    def test_remove_all(self, running_factory, cycling_factory):
        run = running_factory.make()
        collection = WorkoutCollection([run, cycling_factory.make()])
        assert len(collection.remove_all()) == 2
        assert collection.is_empty
        with pytest.raises(WorkoutNotFoundError):
            collection.find_by_id(run.id)


class TestUpdateFields:
    def test_recomputes_pace_without_override(self, running_factory: RunningFactory):
        run = running_factory.make()
        collection = WorkoutCollection([run])
        updated = collection.update_fields(run.id, {"distance": 10.0})
        assert updated.distance == 10.0
        assert updated.pace == 2.5
        assert collection.find_by_id(run.id).pace == 2.5

    def test_override_is_stored_verbatim(self, cycling_factory: CyclingFactory):
        ride = cycling_factory.make()
        collection = WorkoutCollection([ride])
        updated = collection.update_fields(
            ride.id, {"distance": 40.0}, metric_override=33.3
        )
        assert updated.distance == 40.0
        assert updated.speed == 33.3

    def test_keeps_identity_and_interaction_count(self, running_factory):
        run = running_factory.make({"interaction_count": 4})
        collection = WorkoutCollection([run])
        updated = collection.update_fields(run.id, {"cadence": 170})
        assert updated.id == run.id
        assert updated.created_at == run.created_at
        assert updated.coordinates == run.coordinates
        assert updated.description == run.description
        assert updated.interaction_count == 4

    @pytest.mark.parametrize(
        "changes",
        [
            {"coordinates": (9.0, 9.0)},
            {"created_at": "2020-01-01T00:00:00"},
            {"type": "cycling"},
            {"interaction_count": 99},
            {"pace": 1.0},
        ],
    )
    def test_rejects_fixed_fields(self, running_factory, changes):
        run = running_factory.make()
        collection = WorkoutCollection([run])
        with pytest.raises(UneditableFieldError):
            collection.update_fields(run.id, {"distance": 10.0, **changes})
        assert collection.find_by_id(run.id) == run

    def test_cannot_take_another_workouts_id(self, running_factory, cycling_factory):
        run, ride = running_factory.make(), cycling_factory.make()
        collection = WorkoutCollection([run, ride])
        with pytest.raises(UneditableFieldError):
            collection.update_fields(run.id, {"id": ride.id})
        assert [w.id for w in collection.all()] == [run.id, ride.id]

    def test_rejects_other_variants_field(self, cycling_factory):
        ride = cycling_factory.make()
        collection = WorkoutCollection([ride])
        with pytest.raises(UneditableFieldError):
            collection.update_fields(ride.id, {"cadence": 170})

    def test_keeps_position(self, running_factory, cycling_factory):
        workouts = [running_factory.make(), cycling_factory.make(), running_factory.make()]
        collection = WorkoutCollection(workouts)
        collection.update_fields(workouts[1].id, {"duration": 30.0})
        assert collection.index_of(workouts[1].id) == 1

    def test_invalid_change_leaves_workout_untouched(self, running_factory):
        run = running_factory.make()
        collection = WorkoutCollection([run])
        with pytest.raises(ValidationError):
            collection.update_fields(run.id, {"distance": 10.0, "cadence": -3})
        assert collection.find_by_id(run.id) == run

    def test_missing_raises_not_found(self, running_factory):
        collection = WorkoutCollection([running_factory.make()])
        with pytest.raises(WorkoutNotFoundError):
            collection.update_fields("missing", {"distance": 1.0})


def test_record_click(running_factory: RunningFactory):
    run = running_factory.make()
    collection = WorkoutCollection([run])
    assert collection.record_click(run.id) == 1
    assert collection.record_click(run.id) == 2
    assert collection.find_by_id(run.id).interaction_count == 2
