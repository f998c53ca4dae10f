"""Tests for snapshot storage and the ledger repository."""

import json
import pytest
from datetime import date
from decimal import Decimal

from smartledger.models import Budget, TransactionType
from smartledger.services.storage import (
    DecodeError,
    InMemoryStorage,
    JsonFileStorage,
    LedgerRepository,
    SnapshotStorageInterface,
    StorageError,
    StorageWriteError,
    decode_snapshot,
)
from smartledger.services.storage.repository import _TRANSACTIONS


TX_KEY = "smartledger_transactions_v1"
BUDGET_KEY = "smartledger_budgets_v1"


class FailingStorage(SnapshotStorageInterface):
    """Storage whose every operation fails."""

    def load(self, key):
        raise StorageError("disk on fire")

    def save(self, key, payload):
        raise StorageWriteError("quota exceeded")


def _repo(storage):
    return LedgerRepository(storage, transactions_key=TX_KEY, budgets_key=BUDGET_KEY)


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_empty_slot(self):
        """Test an unknown key loads as None."""
        assert InMemoryStorage().load("x") is None

    def test_save_and_load(self):
        """Test payloads are stored per key."""
        storage = InMemoryStorage()
        storage.save("a", "[]")
        storage.save("b", "[1]")
        assert storage.load("a") == "[]"
        assert sorted(storage.keys()) == ["a", "b"]


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file(self, tmp_path):
        """Test a missing file loads as None."""
        assert JsonFileStorage(tmp_path).load(TX_KEY) is None

    def test_write_creates_directory(self, tmp_path):
        """Test the data directory is created on first save."""
        storage = JsonFileStorage(tmp_path / "nested" / "data")
        storage.save(TX_KEY, "[]")
        assert storage.path_for(TX_KEY).read_text(encoding="utf-8") == "[]"
        assert storage.load(TX_KEY) == "[]"

    def test_overwrites_whole_file(self, tmp_path):
        """Test each save replaces the previous snapshot."""
        storage = JsonFileStorage(tmp_path)
        storage.save(TX_KEY, '[{"a": 1}, {"b": 2}]')
        storage.save(TX_KEY, "[]")
        assert storage.load(TX_KEY) == "[]"

    def test_no_temp_files_left(self, tmp_path):
        """Test the atomic write leaves only the target file."""
        storage = JsonFileStorage(tmp_path)
        storage.save(BUDGET_KEY, "[]")
        assert [p.name for p in tmp_path.iterdir()] == [f"{BUDGET_KEY}.json"]

    def test_unreadable_path_raises_storage_error(self, tmp_path):
        """Test read failures surface as StorageError."""
        storage = JsonFileStorage(tmp_path)
        storage.path_for(TX_KEY).mkdir()
        with pytest.raises(StorageError):
            storage.load(TX_KEY)

    def test_invalid_utf8_raises_decode_error(self, tmp_path):
        """Test bytes that are not UTF-8 surface as DecodeError."""
        storage = JsonFileStorage(tmp_path)
        storage.path_for(TX_KEY).write_bytes(b"[\xff\xfe garbage")
        with pytest.raises(DecodeError) as exc_info:
            storage.load(TX_KEY)
        assert exc_info.value.key == TX_KEY

    def test_unwritable_path_raises_write_error(self, tmp_path):
        """Test write failures surface as StorageWriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = JsonFileStorage(blocker)
        with pytest.raises(StorageWriteError):
            storage.save(TX_KEY, "[]")


class TestDecodeSnapshot:
    """Tests for decode_snapshot."""

    def test_bad_json(self):
        """Test malformed JSON raises DecodeError with the key."""
        with pytest.raises(DecodeError) as exc_info:
            decode_snapshot(TX_KEY, "{not json", _TRANSACTIONS)
        assert exc_info.value.key == TX_KEY

    def test_schema_mismatch(self):
        """Test well-formed JSON of the wrong shape raises DecodeError."""
        with pytest.raises(DecodeError):
            decode_snapshot(TX_KEY, '{"id": "x"}', _TRANSACTIONS)

    def test_negative_amount_rejected(self):
        """Test stored data must satisfy the amount invariant."""
        payload = json.dumps([{
            "id": "x", "amount": -1, "type": "expense",
            "category": "food", "date": "2026-01-01", "note": "",
        }])
        with pytest.raises(DecodeError):
            decode_snapshot(TX_KEY, payload, _TRANSACTIONS)


class TestLedgerRepository:
    """Tests for LedgerRepository."""

    def test_empty_storage_loads_empty(self):
        """Test first run gives empty stores."""
        repo = _repo(InMemoryStorage())
        assert repo.load_transactions() == []
        assert repo.load_budgets() == []

    def test_blank_payload_loads_empty(self):
        """Test a blank slot is treated as empty."""
        repo = _repo(InMemoryStorage({TX_KEY: "   "}))
        assert repo.load_transactions() == []

    def test_transactions_round_trip(self, make_tx):
        """Test transactions survive a save and load unchanged and in order."""
        txs = [
            make_tx("12.34", note="lunch", day=date(2026, 10, 2)),
            make_tx(1000, type=TransactionType.INCOME, category="salary", day=date(2026, 10, 1)),
        ]
        repo = _repo(InMemoryStorage())
        assert repo.save_transactions(txs) is True
        assert repo.load_transactions() == txs

    def test_budgets_round_trip_with_alias(self):
        """Test budgets are written with categoryId and read back."""
        storage = InMemoryStorage()
        repo = _repo(storage)
        budgets = [Budget(category_id="food", limit=Decimal("500"))]
        repo.save_budgets(budgets)

        raw = json.loads(storage.load(BUDGET_KEY))
        assert raw[0]["categoryId"] == "food"
        assert repo.load_budgets() == budgets

    def test_stores_are_independent_slots(self, make_tx):
        """Test each store lives under its own key."""
        storage = InMemoryStorage()
        repo = _repo(storage)
        repo.save_transactions([make_tx(1)])
        assert storage.load(BUDGET_KEY) is None

    def test_loads_existing_numeric_snapshot(self):
        """Test snapshots with numeric amounts and camelCase keys load."""
        storage = InMemoryStorage({
            TX_KEY: json.dumps([{
                "id": "abc", "amount": 25.5, "type": "expense",
                "category": "food", "date": "2026-10-01", "note": "pizza",
            }]),
            BUDGET_KEY: json.dumps([{"categoryId": "food", "limit": 300}]),
        })
        repo = _repo(storage)

        (tx,) = repo.load_transactions()
        assert tx.amount == Decimal("25.5")
        assert tx.date == date(2026, 10, 1)
        (budget,) = repo.load_budgets()
        assert budget.limit == Decimal("300")

    def test_corrupt_snapshot_loads_empty(self):
        """Test a corrupt slot is discarded instead of crashing."""
        storage = InMemoryStorage({TX_KEY: "{oops", BUDGET_KEY: '[{"limit": 1}]'})
        repo = _repo(storage)
        assert repo.load_transactions() == []
        assert repo.load_budgets() == []

    def test_corrupt_slot_does_not_affect_other(self):
        """Test one bad slot leaves the other readable."""
        storage = InMemoryStorage({
            TX_KEY: "garbage",
            BUDGET_KEY: json.dumps([{"categoryId": "food", "limit": 10}]),
        })
        repo = _repo(storage)
        assert repo.load_transactions() == []
        assert len(repo.load_budgets()) == 1

    def test_unreadable_backend_loads_empty(self):
        """Test read errors are swallowed."""
        repo = _repo(FailingStorage())
        assert repo.load_transactions() == []
        assert repo.load_budgets() == []

    def test_write_failure_returns_false(self, make_tx):
        """Test write errors never propagate."""
        repo = _repo(FailingStorage())
        assert repo.save_transactions([make_tx(1)]) is False
        assert repo.save_budgets([]) is False

    def test_file_backed_round_trip(self, tmp_path, make_tx):
        """Test the repository over real files."""
        txs = [make_tx("0.10"), make_tx("0.20")]
        _repo(JsonFileStorage(tmp_path)).save_transactions(txs)
        assert _repo(JsonFileStorage(tmp_path)).load_transactions() == txs

    def test_invalid_utf8_file_loads_empty(self, tmp_path):
        """Test an undecodable slot file is discarded instead of crashing."""
        storage = JsonFileStorage(tmp_path)
        storage.path_for(TX_KEY).write_bytes(b"[\xff\xfe garbage")
        storage.save(BUDGET_KEY, json.dumps([{"categoryId": "food", "limit": 10}]))
        repo = _repo(storage)
        assert repo.load_transactions() == []
        assert len(repo.load_budgets()) == 1

    def test_long_note_is_kept(self, tmp_path):
        """Test a stored note of any length loads with the rest of the slot."""
        storage = JsonFileStorage(tmp_path)
        storage.save(TX_KEY, json.dumps([
            {"id": "a", "amount": 1, "type": "expense", "category": "food",
             "date": "2026-10-01", "note": "x" * 5000},
            {"id": "b", "amount": 2, "type": "expense", "category": "food",
             "date": "2026-10-02", "note": "short"},
        ]))
        txs = _repo(storage).load_transactions()
        assert [t.id for t in txs] == ["a", "b"]
        assert len(txs[0].note) == 5000

    def test_default_keys_from_settings(self):
        """Test keys fall back to the configured slot names."""
        storage = InMemoryStorage()
        LedgerRepository(storage).save_budgets([])
        assert storage.keys() == [BUDGET_KEY]
