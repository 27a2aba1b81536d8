"""String-keyed stores for persisted snapshots."""

import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Key-value store that lives as long as the process."""

    def __init__(self, items: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(items or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore:
    """Key-value store backed by a single JSON object on disk.

    Every write replaces the whole file through a temporary file in the same
    directory, so readers never see a half-written file.
    """

    def __init__(self, path: Path):
        self.path = path

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8").strip() or "{}"
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Could not parse {self.path}: {exc}") from exc
        if not isinstance(items, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        return items

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(items, indent=2, sort_keys=True) + "\n"
        with NamedTemporaryFile(
            "w", dir=self.path.parent, delete=False, encoding="utf-8"
        ) as tmp:
            temp_path = Path(tmp.name)
        try:
            temp_path.write_text(payload, encoding="utf-8")
            temp_path.replace(self.path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(items)} keys to {self.path}")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)
