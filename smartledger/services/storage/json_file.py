"""
Local JSON File Storage

One file per storage key, inside a data directory:

    <data_dir>/smartledger_transactions_v1.json
    <data_dir>/smartledger_budgets_v1.json

TRADEOFFS:
- Every save rewrites the whole file (fine at personal scale)
- Writes go to a temp file first and are moved into place, so a crash
  mid-write never leaves a half-written snapshot behind
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from smartledger.config import get_settings
from smartledger.services.storage.interface import (
    DecodeError,
    SnapshotStorageInterface,
    StorageError,
    StorageWriteError,
)


class JsonFileStorage(SnapshotStorageInterface):
    """Snapshot storage backed by files in a local directory."""

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir or get_settings().storage.data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File that holds the given slot."""
        return self._data_dir / f"{key}.json"

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return self._read(path)
        except UnicodeDecodeError as e:
            raise DecodeError(key, f"not valid UTF-8 at byte {e.start}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def save(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        try:
            self._write(path, payload)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e
