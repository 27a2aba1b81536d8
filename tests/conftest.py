import os

import pytest

# Ensure allowed environment for env_loader
os.environ.setdefault("ENV", "dev")

from mapty.app import env_loader  # noqa: F401, E402
from mapty.db.kv_store import InMemoryKeyValueStore  # noqa: E402
from mapty.map_view import InMemoryMapView  # noqa: E402
from mapty.tracker import WorkoutTracker  # noqa: E402

from tests._factories import RunningFactory, CyclingFactory  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_storage_file(tmp_path, monkeypatch):
    """Point the storage file at a temporary directory for every test.

    This keeps any code path that falls back to the configured storage path
    from reading or writing the real file in the user's home directory.
    """
    monkeypatch.setenv("MAPTY_STORAGE_PATH", str(tmp_path / "storage.json"))
    yield


@pytest.fixture(scope="session")
def running_factory() -> RunningFactory:
    return RunningFactory()


@pytest.fixture(scope="session")
def cycling_factory() -> CyclingFactory:
    return CyclingFactory()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def map_view() -> InMemoryMapView:
    return InMemoryMapView()


@pytest.fixture
def tracker(
    kv_store: InMemoryKeyValueStore, map_view: InMemoryMapView
) -> WorkoutTracker:
    """A started tracker with an empty store."""
    tracker = WorkoutTracker(store=kv_store, map_view=map_view)
    tracker.start()
    return tracker
