"""Integration tests for the coordinator (in-memory storage, fake AI)."""

import asyncio
import json
import logging
import pytest
from datetime import date
from decimal import Decimal

from smartledger.agents import (
    NO_DATA_MESSAGE,
    AnalysisStatus,
    CompletionClient,
    FinancialAdvisor,
)
from smartledger.models import TransactionType, ViewState
from smartledger.orchestrator import LedgerCoordinator, create_app_components
from smartledger.queries import TransactionQuery, TypeFilter
from smartledger.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    LedgerRepository,
    SnapshotStorageInterface,
    StorageWriteError,
)
from smartledger.validation import TransactionForm, TransactionFormValidator


TX_KEY = "smartledger_transactions_v1"
BUDGET_KEY = "smartledger_budgets_v1"
TODAY = date(2026, 10, 19)


class EchoClient(CompletionClient):
    def __init__(self):
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        return "**Suggestions**: cook at home."


class ReadOnlyStorage(InMemoryStorage):
    """Loads fine, refuses every write."""

    def save(self, key, payload):
        raise StorageWriteError("read-only")


def _coordinator(storage=None, client=None):
    storage = storage if storage is not None else InMemoryStorage()
    repository = LedgerRepository(storage, transactions_key=TX_KEY, budgets_key=BUDGET_KEY)
    advisor = FinancialAdvisor(client or EchoClient(), min_latency=0)
    return LedgerCoordinator(
        repository=repository,
        advisor=advisor,
        validator=TransactionFormValidator(today=TODAY),
        today=lambda: TODAY,
    )


def _expense(amount="30", category="food", day="2026-10-18", note=""):
    return TransactionForm(
        type=TransactionType.EXPENSE,
        amount=amount,
        category=category,
        date=day,
        note=note,
    )


def _stored(storage, key):
    payload = storage.load(key)
    return json.loads(payload) if payload else []


class TestStartup:
    """Tests for loading state."""

    def test_first_run_is_empty(self):
        """Test empty storage gives empty stores and the dashboard."""
        coordinator = _coordinator()
        assert len(coordinator.transactions) == 0
        assert len(coordinator.budgets) == 0
        assert coordinator.state.view == ViewState.DASHBOARD
        assert coordinator.analysis.status == AnalysisStatus.IDLE

    def test_loads_existing_snapshots(self):
        """Test stored data is loaded at construction."""
        storage = InMemoryStorage({
            TX_KEY: json.dumps([{
                "id": "a", "amount": 12, "type": "income",
                "category": "salary", "date": "2026-10-01", "note": "",
            }]),
            BUDGET_KEY: json.dumps([{"categoryId": "food", "limit": 100}]),
        })
        coordinator = _coordinator(storage)
        assert coordinator.transactions.get("a").amount == Decimal("12")
        assert coordinator.budgets.limit_for("food") == Decimal("100")

    def test_invalid_utf8_file_starts_empty(self, tmp_path):
        """Test an undecodable snapshot file does not prevent startup."""
        storage = JsonFileStorage(tmp_path)
        storage.path_for(TX_KEY).write_bytes(b"[\xff\xfe garbage")
        coordinator = _coordinator(storage)
        assert len(coordinator.transactions) == 0

    def test_long_note_round_trip(self):
        """Test a long note survives add, save and reload."""
        storage = InMemoryStorage()
        _coordinator(storage).add_transaction(_expense(note="z" * 1000))
        reloaded = _coordinator(storage)
        assert reloaded.transactions.all()[0].note == "z" * 1000

    def test_corrupt_snapshot_starts_empty(self):
        """Test a corrupt slot does not prevent startup."""
        coordinator = _coordinator(InMemoryStorage({TX_KEY: "not json"}))
        assert len(coordinator.transactions) == 0


class TestNavigation:
    """Tests for view selection."""

    def test_select_view(self):
        """Test switching views."""
        coordinator = _coordinator()
        assert coordinator.select_view(ViewState.BUDGETS).view == ViewState.BUDGETS
        assert coordinator.select_view("ai-insights").view == ViewState.AI_INSIGHTS

    def test_switching_view_drops_pending_delete(self):
        """Test a pending confirmation does not survive navigation."""
        coordinator = _coordinator()
        coordinator.request_delete("x")
        coordinator.select_view(ViewState.DASHBOARD)
        assert coordinator.state.pending_delete_id is None

    def test_sessions_keep_their_own_ui_state(self):
        """Test two coordinators over one storage don't share view or pending delete."""
        storage = InMemoryStorage()
        first, second = _coordinator(storage), _coordinator(storage)

        first.select_view(ViewState.TRANSACTIONS)
        first.request_delete("x")

        assert second.state.view == ViewState.DASHBOARD
        assert second.state.pending_delete_id is None
        assert second.confirm_delete() is False
        assert first.state.pending_delete_id == "x"

    def test_unknown_view_rejected(self):
        """Test the view set is closed."""
        with pytest.raises(ValueError):
            _coordinator().select_view("settings")


class TestAddTransaction:
    """Tests for the add flow."""

    def test_valid_add_persists(self):
        """Test a valid submission is stored and written."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)

        result = coordinator.add_transaction(_expense(note="lunch"))

        assert result.is_valid
        assert len(coordinator.transactions) == 1
        stored = _stored(storage, TX_KEY)
        assert len(stored) == 1
        assert stored[0]["note"] == "lunch"
        assert stored[0]["type"] == "expense"

    def test_newest_first_in_snapshot(self):
        """Test the snapshot keeps store order."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)
        coordinator.add_transaction(_expense(note="first"))
        coordinator.add_transaction(_expense(note="second"))
        assert [t["note"] for t in _stored(storage, TX_KEY)] == ["second", "first"]

    def test_invalid_add_changes_nothing(self):
        """Test a rejected submission neither mutates nor persists."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)

        result = coordinator.add_transaction(_expense(amount="-5"))

        assert not result.is_valid
        assert len(coordinator.transactions) == 0
        assert storage.load(TX_KEY) is None

    def test_write_failure_keeps_memory_state(self):
        """Test the in-memory store stays authoritative when saving fails."""
        coordinator = _coordinator(ReadOnlyStorage())
        result = coordinator.add_transaction(_expense())
        assert result.is_valid
        assert len(coordinator.transactions) == 1


class TestDeleteTransaction:
    """Tests for the confirm-before-delete flow."""

    def test_request_then_confirm(self):
        """Test a confirmed delete removes and persists."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)
        coordinator.add_transaction(_expense(note="keep"))
        coordinator.add_transaction(_expense(note="drop"))
        target = coordinator.transactions.all()[0]

        coordinator.request_delete(target.id)
        assert coordinator.state.pending_delete_id == target.id
        assert len(coordinator.transactions) == 2

        assert coordinator.confirm_delete() is True
        assert coordinator.state.pending_delete_id is None
        assert [t["note"] for t in _stored(storage, TX_KEY)] == ["keep"]

    def test_cancel(self):
        """Test cancelling leaves the transaction in place."""
        coordinator = _coordinator()
        coordinator.add_transaction(_expense())
        tx_id = coordinator.transactions.all()[0].id

        coordinator.request_delete(tx_id)
        coordinator.cancel_delete()

        assert coordinator.state.pending_delete_id is None
        assert coordinator.confirm_delete() is False
        assert len(coordinator.transactions) == 1

    def test_confirm_unknown_id_is_noop(self):
        """Test deleting a missing id changes nothing and writes nothing."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)
        coordinator.request_delete("ghost")
        assert coordinator.confirm_delete() is False
        assert storage.load(TX_KEY) is None


class TestBudgets:
    """Tests for the budget flow."""

    def test_set_budget_persists(self):
        """Test a budget is stored with the camelCase key."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)

        result = coordinator.update_budget("food", "500")

        assert result.is_valid
        assert coordinator.budgets.limit_for("food") == Decimal("500")
        assert _stored(storage, BUDGET_KEY)[0]["categoryId"] == "food"

    def test_zero_removes_budget(self):
        """Test zero clears the budget and the snapshot."""
        storage = InMemoryStorage()
        coordinator = _coordinator(storage)
        coordinator.update_budget("food", "500")

        coordinator.update_budget("food", "0")

        assert "food" not in coordinator.budgets
        assert _stored(storage, BUDGET_KEY) == []

    def test_invalid_limit_changes_nothing(self):
        """Test a rejected limit leaves the old budget."""
        coordinator = _coordinator()
        coordinator.update_budget("food", "500")
        result = coordinator.update_budget("food", "-1")
        assert not result.is_valid
        assert coordinator.budgets.limit_for("food") == Decimal("500")

    def test_overview_reflects_spend(self):
        """Test the budget view uses this month's spend."""
        coordinator = _coordinator()
        coordinator.update_budget("food", "100")
        coordinator.add_transaction(_expense(amount="85", day="2026-10-02"))
        coordinator.add_transaction(_expense(amount="50", day="2026-09-30"))

        food = next(line for line in coordinator.budget_overview() if line.category_id == "food")

        assert food.spent == Decimal("85")
        assert food.status.near_limit
        assert not food.status.over_budget


class TestDerivedViews:
    """Tests for the dashboard and list views."""

    def test_dashboard_numbers(self):
        """Test summary, breakdowns, rollup and trend agree."""
        coordinator = _coordinator()
        coordinator.add_transaction(TransactionForm(
            type=TransactionType.INCOME, amount="100", category="salary", date="2026-10-18",
        ))
        coordinator.add_transaction(_expense(amount="30", day="2026-10-18"))
        coordinator.add_transaction(_expense(amount="20", category="transport", day="2026-10-19"))

        summary = coordinator.summary()
        assert summary.balance == Decimal("50")
        assert [s.category_id for s in coordinator.expense_breakdown()] == ["food", "transport"]
        assert [s.category_id for s in coordinator.income_breakdown()] == ["salary"]

        buckets = coordinator.daily_rollup()
        assert len(buckets) == 7
        assert buckets[-1].day == TODAY
        assert buckets[-1].expense == Decimal("20")

        assert [p.cumulative for p in coordinator.net_worth_trend()] == [
            Decimal("70"), Decimal("50"),
        ]

    def test_list_transactions(self):
        """Test the list view applies the query."""
        coordinator = _coordinator()
        coordinator.add_transaction(_expense(note="coffee", day="2026-10-01"))
        coordinator.add_transaction(_expense(note="tea", day="2026-10-05"))

        assert [t.note for t in coordinator.list_transactions()] == ["tea", "coffee"]
        query = TransactionQuery(search="cof", type_filter=TypeFilter.EXPENSE)
        assert [t.note for t in coordinator.list_transactions(query)] == ["coffee"]


class TestAnalysisIntent:
    """Tests for the analysis intent."""

    def test_empty_ledger(self):
        """Test analysis over an empty ledger skips the AI."""
        client = EchoClient()
        coordinator = _coordinator(client=client)
        state = asyncio.run(coordinator.request_analysis())
        assert state.text == NO_DATA_MESSAGE
        assert client.prompts == []

    def test_analysis_uses_current_transactions(self):
        """Test the prompt is built from the store."""
        client = EchoClient()
        coordinator = _coordinator(client=client)
        coordinator.add_transaction(_expense(note="sushi"))

        state = asyncio.run(coordinator.request_analysis())

        assert state.status == AnalysisStatus.SUCCESS
        assert "Note: sushi" in client.prompts[0]
        assert coordinator.analysis is state
        assert coordinator.reset_analysis().status == AnalysisStatus.IDLE


class TestFactory:
    """Tests for create_app_components."""

    def test_injected_dependencies(self):
        """Test the factory wires injected storage and client."""
        storage = InMemoryStorage()
        coordinator = create_app_components(storage=storage, completion_client=EchoClient())

        coordinator.add_transaction(_expense(day=date.today().isoformat()))

        assert storage.load(TX_KEY) is not None
        assert isinstance(coordinator, LedgerCoordinator)

    def test_debug_mode_sets_debug_logging(self, monkeypatch, tmp_path):
        """Test DEBUG_MODE turns on debug logging at startup."""
        monkeypatch.setenv("DEBUG_MODE", "true")
        monkeypatch.chdir(tmp_path)

        create_app_components(storage=InMemoryStorage(), completion_client=EchoClient())

        assert logging.getLogger("smartledger").level == logging.DEBUG

    def test_missing_api_key_falls_back(self, monkeypatch, tmp_path):
        """Test the app still starts without a Gemini key."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("ANALYSIS_MIN_LATENCY_SECONDS", "0")
        monkeypatch.chdir(tmp_path)

        coordinator = create_app_components(storage=InMemoryStorage())

        coordinator.add_transaction(_expense(day=date.today().isoformat()))
        state = asyncio.run(coordinator.request_analysis())
        assert state.status == AnalysisStatus.FAILURE


def test_storage_interface_is_abstract():
    """Test the storage interface cannot be instantiated."""
    with pytest.raises(TypeError):
        SnapshotStorageInterface()
