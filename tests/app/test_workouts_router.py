"""Test the /workouts endpoints."""

from fastapi.testclient import TestClient

from mapty.tracker import WorkoutTracker


def _create(client: TestClient, **fields) -> dict:
    body = {"type": "running", "distance": "5", "duration": "25", "cadence": "180"}
    body.update(fields)
    response = client.post("/workouts", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateWorkout:
    def test_create_running(self, client: TestClient):
        data = _create(client, coordinates=[1, 1])
        assert data["type"] == "running"
        assert data["description"].startswith("Running on ")
        assert data["metric_name"] == "pace"
        assert data["metric_value"] == "5.0"
        assert data["metric_unit"] == "min/km"
        assert data["extra_name"] == "cadence"
        assert data["extra_value"] == 180
        assert data["icon"] == "\U0001f3c3\u200d\u2642\ufe0f"

    def test_create_cycling_at_clicked_location(self, client: TestClient):
        client.post("/map/click", json={"lat": 2, "lng": 2})
        data = _create(
            client, type="cycling", distance=20, duration=60, cadence=None, elevation_gain=100
        )
        assert data["metric_name"] == "speed"
        assert data["metric_value"] == "20.0"
        assert data["extra_unit"] == "m"

    def test_invalid_input_returns_banner_detail(self, client: TestClient):
        response = client.post(
            "/workouts",
            json={
                "type": "running",
                "distance": "0",
                "duration": "25",
                "cadence": "180",
                "coordinates": [1, 1],
            },
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["errors"] == ["distance must be greater than 0"]
        assert detail["banner_seconds"] == 3
        assert client.get("/workouts").json() == []

    def test_unknown_type_is_rejected(self, client: TestClient):
        response = client.post("/workouts", json={"type": "rowing", "coordinates": [1, 1]})
        assert response.status_code == 422


class TestReadWorkouts:
    def test_newest_first_by_default(self, client: TestClient):
        first = _create(client, coordinates=[1, 1])
        second = _create(client, coordinates=[2, 2])
        ids = [w["id"] for w in client.get("/workouts").json()]
        assert ids == [second["id"], first["id"]]
        ids = [w["id"] for w in client.get("/workouts?sort_order=asc").json()]
        assert ids == [first["id"], second["id"]]

    def test_controls(self, client: TestClient):
        assert client.get("/workouts/controls").json() == {"show_delete_all": False}
        _create(client, coordinates=[1, 1])
        assert client.get("/workouts/controls").json() == {"show_delete_all": True}


class TestEditWorkout:
    def test_edit_recomputes_when_metric_resubmitted(self, client: TestClient):
        created = _create(client, coordinates=[1, 1])
        response = client.patch(
            f"/workouts/{created['id']}",
            json={"distance": "10", "duration": "25", "pace": "5", "cadence": "180"},
        )
        assert response.status_code == 200
        assert response.json()["metric_value"] == "2.5"

    def test_edit_with_new_metric_overrides(self, client: TestClient):
        created = _create(client, coordinates=[1, 1])
        response = client.patch(f"/workouts/{created['id']}", json={"pace": "4.25"})
        assert response.status_code == 200
        # Halves round up, matching what the browser shows.
        assert response.json()["metric_value"] == "4.3"

    def test_invalid_edit(self, client: TestClient):
        created = _create(client, coordinates=[1, 1])
        response = client.patch(f"/workouts/{created['id']}", json={"duration": "-1"})
        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == ["duration must be greater than 0"]

    def test_edit_unknown_workout(self, client: TestClient):
        response = client.patch("/workouts/missing", json={"distance": "3"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Workout with ID 'missing' not found"

    def test_cancel_edit_returns_stored_values(self, client: TestClient):
        created = _create(client, coordinates=[1, 1])
        response = client.post(f"/workouts/{created['id']}/cancel-edit")
        assert response.status_code == 200
        assert response.json() == created
        assert client.post("/workouts/missing/cancel-edit").status_code == 404


class TestFocusWorkout:
    def test_focus_moves_map(self, client: TestClient):
        created = _create(client, coordinates=[1, 1])
        _create(client, coordinates=[2, 2])
        response = client.post(f"/workouts/{created['id']}/focus")
        assert response.status_code == 200
        assert response.json()["interaction_count"] == 1
        assert client.get("/map").json()["center"] == [1.0, 1.0]

    def test_focus_unknown_workout(self, client: TestClient):
        assert client.post("/workouts/missing/focus").status_code == 404


class TestDeleteWorkouts:
    def test_delete_one(self, client: TestClient, tracker: WorkoutTracker):
        created = _create(client, coordinates=[1, 1])
        response = client.delete(f"/workouts/{created['id']}")
        assert response.status_code == 200
        assert created["description"] in response.json()["message"]
        assert tracker.workouts() == ()
        assert client.get("/map").json()["markers"] == []

    def test_delete_unknown(self, client: TestClient):
        _create(client, coordinates=[1, 1])
        assert client.delete("/workouts/missing").status_code == 404
        assert len(client.get("/workouts").json()) == 1

    def test_delete_all(self, client: TestClient):
        _create(client, coordinates=[1, 1])
        _create(client, coordinates=[2, 2])
        response = client.delete("/workouts")
        assert response.status_code == 200
        assert response.json() == {"deleted": 2}
        assert client.get("/workouts").json() == []
        assert client.get("/workouts/controls").json() == {"show_delete_all": False}
