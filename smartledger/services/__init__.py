"""Services package."""

from smartledger.services.storage import (
    DecodeError,
    InMemoryStorage,
    JsonFileStorage,
    LedgerRepository,
    SnapshotStorageInterface,
    StorageError,
    StorageWriteError,
)

__all__ = [
    "DecodeError",
    "InMemoryStorage",
    "JsonFileStorage",
    "LedgerRepository",
    "SnapshotStorageInterface",
    "StorageError",
    "StorageWriteError",
]
