"""Key/value store with JSON values.

Values are stored as JSON text per key, the way browser local storage
holds them. Reads of unparsable text raise StorageReadError; callers decide
whether that degrades to "absent".
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote


class StorageReadError(Exception):
    """Persisted value could not be parsed."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Corrupt value for '{key}': {message}")


class KeyValueStore(ABC):
    """Base class for stores. Subclasses only handle raw text."""

    @abstractmethod
    def get_raw(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set_raw(self, key: str, text: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]:
        pass

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value, or default if the key is absent."""
        text = self.get_raw(key)
        if text is None:
            return default
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageReadError(key, str(e)) from e

    def put(self, key: str, value: Any) -> None:
        self.set_raw(key, json.dumps(value, ensure_ascii=False))

    def append_bounded(self, key: str, item: Any, limit: int) -> list[Any]:
        """Append item to the list at key, keeping only the newest `limit` items."""
        items = self.get(key, [])
        if not isinstance(items, list):
            raise StorageReadError(key, "expected a list")
        items = [*items, item][-limit:]
        self.put(key, items)
        return items


class InMemoryStore(KeyValueStore):
    """Process-local store (tests, one-off runs)."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def set_raw(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]


class JsonFileStore(KeyValueStore):
    """One JSON file per key under a directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / f"{quote(key, safe='')}.json"

    def get_raw(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_raw(self, key: str, text: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self, prefix: str = "") -> list[str]:
        names = (unquote(p.stem) for p in self.root.glob("*.json"))
        return sorted(k for k in names if k.startswith(prefix))
