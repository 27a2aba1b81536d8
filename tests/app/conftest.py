import pytest
from fastapi.testclient import TestClient

from mapty.app.app import create_app
from mapty.app.env_loader import Settings
from mapty.db.kv_store import InMemoryKeyValueStore
from mapty.map_view import InMemoryMapView
from mapty.tracker import WorkoutTracker


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_path=tmp_path / "storage.json", error_banner_seconds=3)


@pytest.fixture
def tracker(
    kv_store: InMemoryKeyValueStore, map_view: InMemoryMapView
) -> WorkoutTracker:
    """An unstarted tracker; the app starts it."""
    return WorkoutTracker(store=kv_store, map_view=map_view)


@pytest.fixture
def client(tracker: WorkoutTracker, settings: Settings) -> TestClient:
    """Test client around a fresh tracker backed by an in-memory store."""
    return TestClient(create_app(tracker=tracker, settings=settings))
