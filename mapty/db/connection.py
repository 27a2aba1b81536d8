import os
from pathlib import Path

from .kv_store import JsonFileKeyValueStore, KeyValueStore

DEFAULT_STORAGE_PATH = Path("~/.mapty/storage.json")


def get_storage_path() -> Path:
    """Get the path of the storage file from environment variables."""
    raw = os.environ.get("MAPTY_STORAGE_PATH")
    path = Path(raw) if raw else DEFAULT_STORAGE_PATH
    return path.expanduser()


def get_kv_store(path: Path | None = None) -> KeyValueStore:
    """Open the key-value store at `path`, or at the configured storage path."""
    return JsonFileKeyValueStore(path if path is not None else get_storage_path())
