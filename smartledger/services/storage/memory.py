"""In-memory snapshot storage, used by tests and as the no-disk fallback."""

from typing import Optional

from smartledger.services.storage.interface import SnapshotStorageInterface


class InMemoryStorage(SnapshotStorageInterface):
    """Keeps payloads in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def save(self, key: str, payload: str) -> None:
        self._slots[key] = payload

    def keys(self) -> list[str]:
        return list(self._slots)
