"""
Ledger Snapshot Repository

Encodes stores to JSON snapshots and decodes them back.

FAILURE POLICY:
- Loading never raises. A missing slot is an empty collection; a corrupt
  slot (undecodable bytes, bad JSON, schema mismatch, unreadable backend)
  is logged and also becomes an empty collection.
- Saving never raises. Failures are logged and the in-memory stores stay
  authoritative for the rest of the session.

Internally decoding raises DecodeError, so the discarded reason is always
available to the log entry.
"""

from typing import Optional, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from smartledger.config import get_settings
from smartledger.logger import get_logger
from smartledger.models.ledger import Budget, Transaction
from smartledger.services.storage.interface import (
    DecodeError,
    SnapshotStorageInterface,
    StorageError,
)


T = TypeVar("T")

_TRANSACTIONS = TypeAdapter(list[Transaction])
_BUDGETS = TypeAdapter(list[Budget])


def decode_snapshot(key: str, payload: str, adapter: TypeAdapter) -> list:
    """
    Decode one snapshot payload.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the schema
    """
    try:
        return adapter.validate_json(payload)
    except ValidationError as e:
        raise DecodeError(key, f"{e.error_count()} invalid value(s): {e.errors()[0]['msg']}") from e
    except ValueError as e:
        raise DecodeError(key, str(e)) from e


class LedgerRepository:
    """
    Reads and writes the transaction and budget snapshots.

    Each store lives in its own storage slot and is always written whole.
    """

    def __init__(
        self,
        storage: SnapshotStorageInterface,
        transactions_key: Optional[str] = None,
        budgets_key: Optional[str] = None,
    ):
        self._storage = storage
        if transactions_key is None or budgets_key is None:
            storage_settings = get_settings().storage
            transactions_key = transactions_key or storage_settings.transactions_key
            budgets_key = budgets_key or storage_settings.budgets_key
        self._transactions_key = transactions_key
        self._budgets_key = budgets_key
        self._logger = get_logger(__name__)

    @property
    def storage(self) -> SnapshotStorageInterface:
        return self._storage

    def _load(self, key: str, adapter: TypeAdapter) -> list:
        try:
            payload = self._storage.load(key)
        except DecodeError as e:
            self._logger.warning("snapshot_discarded", key=key, reason=e.reason)
            return []
        except StorageError as e:
            self._logger.error("snapshot_read_failed", key=key, error=str(e))
            return []

        if payload is None or not payload.strip():
            return []

        try:
            items = decode_snapshot(key, payload, adapter)
        except DecodeError as e:
            self._logger.warning(
                "snapshot_discarded",
                key=key,
                reason=e.reason,
            )
            return []

        self._logger.debug("snapshot_loaded", key=key, count=len(items))
        return items

    def _save(self, key: str, items: Sequence[T], adapter: TypeAdapter) -> bool:
        try:
            payload = adapter.dump_json(list(items), by_alias=True).decode("utf-8")
            self._storage.save(key, payload)
        except Exception as e:
            # Never propagate: the in-memory state stays authoritative
            self._logger.error(
                "snapshot_write_failed",
                key=key,
                count=len(items),
                error=str(e),
            )
            return False

        self._logger.debug("snapshot_saved", key=key, count=len(items))
        return True

    def load_transactions(self) -> list[Transaction]:
        """Stored transactions in store order, or [] on any failure."""
        return self._load(self._transactions_key, _TRANSACTIONS)

    def save_transactions(self, transactions: Sequence[Transaction]) -> bool:
        """Write the full transaction snapshot. Returns False if the write failed."""
        return self._save(self._transactions_key, transactions, _TRANSACTIONS)

    def load_budgets(self) -> list[Budget]:
        """Stored budgets, or [] on any failure."""
        return self._load(self._budgets_key, _BUDGETS)

    def save_budgets(self, budgets: Sequence[Budget]) -> bool:
        """Write the full budget snapshot. Returns False if the write failed."""
        return self._save(self._budgets_key, budgets, _BUDGETS)
