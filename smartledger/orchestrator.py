"""
View Coordinator for SmartLedger

This module ties together the stores, the snapshot repository, the
validator and the AI advisor, and routes every user intent:

1. Navigation (select a view)
2. Add transaction (validate -> add -> persist)
3. Delete transaction (request -> confirm -> remove -> persist)
4. Set budget (validate -> upsert / remove-on-zero -> persist)
5. Request analysis (advisor state machine)

DESIGN DECISION: UI state is an explicit LedgerState value owned by the
coordinator instead of module-level globals. Persistence is an explicit
side effect issued after each accepted mutation, always as a full snapshot
of the store that changed. Persistence failures never undo the in-memory
change (the repository logs and swallows them).
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from pydantic import BaseModel, ValidationError

from smartledger.agents import (
    AnalysisState,
    CompletionClient,
    FinancialAdvisor,
    GeminiCompletionClient,
    UnconfiguredCompletionClient,
)
from smartledger.analytics import aggregation
from smartledger.config import get_settings
from smartledger.logger import configure_logging, get_logger
from smartledger.models.ledger import Transaction, TransactionType, ViewState
from smartledger.models.reports import (
    BudgetLine,
    CategorySlice,
    DailyBucket,
    LedgerSummary,
    TrendPoint,
)
from smartledger.models.validation import ValidationResult
from smartledger.queries import TransactionQuery, filter_transactions
from smartledger.services.storage import (
    JsonFileStorage,
    LedgerRepository,
    SnapshotStorageInterface,
)
from smartledger.stores import BudgetStore, TransactionStore
from smartledger.validation import TransactionForm, TransactionFormValidator
from smartledger.validation.validator import RawAmount


class LedgerState(BaseModel):
    """Navigation and confirmation state of the UI."""

    view: ViewState = ViewState.DASHBOARD
    pending_delete_id: Optional[str] = None


class LedgerCoordinator:
    """
    Owns the session's stores and routes user intents to them.

    Stores are loaded once at construction; from then on the in-memory
    copies are authoritative and every mutation is persisted immediately.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        advisor: FinancialAdvisor,
        validator: Optional[TransactionFormValidator] = None,
        near_limit_percent: Decimal = aggregation.NEAR_LIMIT_PERCENT,
        trend_window_days: int = aggregation.DAILY_WINDOW_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self._repository = repository
        self._advisor = advisor
        self._validator = validator or TransactionFormValidator()
        self._near_limit_percent = Decimal(str(near_limit_percent))
        self._trend_window_days = trend_window_days
        self._today = today
        self._logger = get_logger(__name__)

        self._transactions = TransactionStore(repository.load_transactions())
        self._budgets = BudgetStore(repository.load_budgets())
        self._state = LedgerState()

        self._logger.info(
            "ledger_loaded",
            transactions=len(self._transactions),
            budgets=len(self._budgets),
        )

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def transactions(self) -> TransactionStore:
        return self._transactions

    @property
    def budgets(self) -> BudgetStore:
        return self._budgets

    @property
    def analysis(self) -> AnalysisState:
        return self._advisor.state

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def select_view(self, view: ViewState) -> LedgerState:
        """Switch the current view. Any pending delete is abandoned."""
        self._state = LedgerState(view=ViewState(view))
        return self._state

    def add_transaction(self, form: TransactionForm) -> ValidationResult:
        """
        Validate a form submission and record it.

        Invalid input leaves the store untouched.
        """
        result = self._validator.validate_transaction(form)
        if not result.is_valid:
            self._logger.info(
                "transaction_rejected",
                fields=[issue.field for issue in result.issues if issue.severity == "error"],
            )
            return result

        transaction = self._transactions.add(result.draft)
        self._logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            category=transaction.category,
        )
        self._repository.save_transactions(self._transactions.all())
        return result

    def request_delete(self, transaction_id: str) -> LedgerState:
        """Ask for confirmation before deleting a transaction."""
        self._state = self._state.model_copy(update={"pending_delete_id": transaction_id})
        return self._state

    def cancel_delete(self) -> LedgerState:
        self._state = self._state.model_copy(update={"pending_delete_id": None})
        return self._state

    def confirm_delete(self) -> bool:
        """
        Delete the transaction awaiting confirmation.

        Returns True if something was removed. Unknown ids are a no-op
        and nothing is persisted.
        """
        transaction_id = self._state.pending_delete_id
        self._state = self._state.model_copy(update={"pending_delete_id": None})
        if transaction_id is None:
            return False

        removed = self._transactions.remove(transaction_id)
        if not removed:
            self._logger.debug("transaction_delete_missing", transaction_id=transaction_id)
            return False

        self._logger.info("transaction_deleted", transaction_id=transaction_id)
        self._repository.save_transactions(self._transactions.all())
        return True

    def update_budget(self, category_id: str, raw_limit: RawAmount) -> ValidationResult:
        """
        Set (or with zero, remove) the monthly budget of a category.

        Invalid input leaves the store untouched.
        """
        result = self._validator.validate_budget_limit(raw_limit)
        if not result.is_valid:
            self._logger.info("budget_rejected", category=category_id)
            return result

        self._budgets.set_limit(category_id, result.limit)
        self._logger.info(
            "budget_updated",
            category=category_id,
            limit=str(result.limit),
            removed=result.limit <= 0,
        )
        self._repository.save_budgets(self._budgets.all())
        return result

    async def request_analysis(self) -> AnalysisState:
        """Run the AI advisor over the current transaction log."""
        return await self._advisor.analyze(self._transactions.all())

    def reset_analysis(self) -> AnalysisState:
        return self._advisor.reset()

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def summary(self) -> LedgerSummary:
        return aggregation.summarize(self._transactions.all())

    def expense_breakdown(self) -> list[CategorySlice]:
        return aggregation.category_breakdown(self._transactions.all(), TransactionType.EXPENSE)

    def income_breakdown(self) -> list[CategorySlice]:
        return aggregation.category_breakdown(self._transactions.all(), TransactionType.INCOME)

    def daily_rollup(self, today: Optional[date] = None) -> list[DailyBucket]:
        return aggregation.daily_rollup(
            self._transactions.all(),
            today or self._today(),
            days=self._trend_window_days,
        )

    def net_worth_trend(self) -> list[TrendPoint]:
        return aggregation.net_worth_trend(self._transactions.all())

    def budget_overview(self, today: Optional[date] = None) -> list[BudgetLine]:
        return aggregation.budget_overview(
            self._transactions.all(),
            self._budgets.all(),
            today or self._today(),
            near_limit_percent=self._near_limit_percent,
        )

    def list_transactions(self, query: Optional[TransactionQuery] = None) -> list[Transaction]:
        return filter_transactions(self._transactions.all(), query)


def create_app_components(
    storage: Optional[SnapshotStorageInterface] = None,
    completion_client: Optional[CompletionClient] = None,
) -> LedgerCoordinator:
    """
    Factory function to create the application.

    Args:
        storage: Snapshot backend. Defaults to JSON files in the
                 configured data directory.
        completion_client: AI backend. Defaults to Gemini; if no API key
                 is configured, analysis requests fail gracefully instead.

    Returns:
        A ready LedgerCoordinator
    """
    settings = get_settings()
    app_settings = settings.app
    configure_logging(app_settings.effective_log_level)
    logger = get_logger(__name__)

    if storage is None:
        storage = JsonFileStorage(settings.storage.data_dir)

    if completion_client is None:
        try:
            completion_client = GeminiCompletionClient()
        except ValidationError as e:
            # AI not configured - continue without it
            logger.warning("gemini_not_configured", error_count=e.error_count())
            completion_client = UnconfiguredCompletionClient()

    repository = LedgerRepository(storage)
    advisor = FinancialAdvisor(
        completion_client,
        min_latency=app_settings.analysis_min_latency_seconds,
    )

    return LedgerCoordinator(
        repository=repository,
        advisor=advisor,
        near_limit_percent=Decimal(str(app_settings.near_limit_percent)),
        trend_window_days=app_settings.trend_window_days,
    )
