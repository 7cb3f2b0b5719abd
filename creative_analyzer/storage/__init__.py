"""Local key/value persistence."""

from .store import InMemoryStore, JsonFileStore, KeyValueStore, StorageReadError

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore", "StorageReadError"]
