"""
Abstract Storage Interface

DESIGN DECISION: Storage is a dumb key-value store of serialized snapshots.
This allows us to:
1. Swap the local JSON files for another backend later
2. Use in-memory storage for testing
3. Keep encoding/decoding (and its failure policy) in one place,
   the LedgerRepository, independent of where the bytes live

The interface is intentionally tiny: load a slot, save a slot.
"""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotStorageInterface(ABC):
    """
    Abstract interface for snapshot storage.

    Each key names an independent slot holding one serialized store.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read the payload stored under a key.

        Args:
            key: Slot name

        Returns:
            The stored payload, or None if the slot is empty

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """
        Replace the payload stored under a key.

        Args:
            key: Slot name
            payload: Full serialized snapshot

        Raises:
            StorageWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DecodeError(StorageError):
    """A stored snapshot could not be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not decode snapshot '{key}': {reason}")


class StorageWriteError(StorageError):
    """A snapshot could not be written."""
    pass
