"""
Storage Services Package

Provides the abstract snapshot storage interface, concrete backends and
the repository that encodes stores into snapshots.
"""

from smartledger.services.storage.interface import (
    DecodeError,
    SnapshotStorageInterface,
    StorageError,
    StorageWriteError,
)
from smartledger.services.storage.json_file import JsonFileStorage
from smartledger.services.storage.memory import InMemoryStorage
from smartledger.services.storage.repository import LedgerRepository, decode_snapshot

__all__ = [
    # Interfaces
    "SnapshotStorageInterface",
    # Exceptions
    "DecodeError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Snapshot codec
    "LedgerRepository",
    "decode_snapshot",
]
