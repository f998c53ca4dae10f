"""
AI Financial Advisor

Turns the transaction log into a prompt, asks the completion service for a
short Markdown report, and tracks the request as a small state machine:

    IDLE -> REQUESTING -> SUCCESS(text) | FAILURE(message)

Terminal states can be re-triggered at any time.

CRITICAL BOUNDARIES:
- An empty ledger never reaches the AI; the user gets NO_DATA_MESSAGE
- The AI is called exactly once per trigger - no automatic retries
- A failure of any kind becomes FAILURE_MESSAGE; analyze() never raises
- The prompt builders are pure and testable without a network
"""

import asyncio
import time
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

from pydantic import BaseModel, Field

from smartledger.agents.completion import CompletionClient
from smartledger.logger import get_logger
from smartledger.models.category import get_category
from smartledger.models.ledger import Transaction


NO_DATA_MESSAGE = (
    "No transactions found to analyze. "
    "Add some income or expenses first."
)
EMPTY_RESPONSE_MESSAGE = "The advisor could not generate an analysis right now."
FAILURE_MESSAGE = (
    "Something went wrong while contacting the AI advisor. "
    "Please check your network connection or API key and try again."
)

DEFAULT_MIN_LATENCY_SECONDS = 1.0


ANALYSIS_PROMPT_TEMPLATE = """You are a professional personal finance advisor. Analyze the user's transactions below.

Data:
{summary}

Write a concise analysis report in Markdown. It MUST contain these sections:
1. **Spending patterns**: Where does the money mainly go? Which expenses look unnecessary?
2. **Income and expense health**: Is the user's financial position healthy? Are they saving?
3. **Suggestions**: 2-3 concrete, actionable money-saving or budgeting tips based on these specific transactions.

Keep the tone encouraging, professional and friendly. Use lists and bold text for readability."""


# =============================================================================
# PROMPT BUILDING (pure)
# =============================================================================

def format_transaction_line(transaction: Transaction) -> str:
    """
    One compact line per transaction.

    Unknown categories fall back to their raw id so the AI still
    has something to work with.
    """
    category = get_category(transaction.category)
    category_label = category.label if category else transaction.category
    return (
        f"{transaction.date.isoformat()}: {transaction.type.label} - "
        f"{category_label} - Amount: {transaction.amount} - "
        f"Note: {transaction.note}"
    )


def build_transaction_summary(transactions: Sequence[Transaction]) -> str:
    """Compact text summary of the log, one line per transaction, store order."""
    return "\n".join(format_transaction_line(t) for t in transactions)


def build_analysis_prompt(transactions: Sequence[Transaction]) -> str:
    """The full instructional prompt sent to the completion service."""
    return ANALYSIS_PROMPT_TEMPLATE.format(summary=build_transaction_summary(transactions))


# =============================================================================
# STATE MACHINE
# =============================================================================

class AnalysisStatus(str, Enum):
    """Where an analysis request currently is."""
    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCESS = "success"
    FAILURE = "failure"


class AnalysisState(BaseModel):
    """Snapshot of the advisor state shown by the AI insights view."""

    status: AnalysisStatus = AnalysisStatus.IDLE
    text: str = Field(
        default="",
        description="Markdown report (SUCCESS only)"
    )
    error: Optional[str] = Field(
        default=None,
        description="User-facing failure message (FAILURE only)"
    )
    last_updated: Optional[datetime] = None

    @property
    def is_loading(self) -> bool:
        return self.status == AnalysisStatus.REQUESTING

    @property
    def can_trigger(self) -> bool:
        return self.status != AnalysisStatus.REQUESTING


class FinancialAdvisor:
    """
    Runs analysis requests against a completion client.

    The minimum latency floor keeps the loading indicator on screen for at
    least min_latency seconds, so fast answers don't flash.
    clock/sleep/now are injectable for tests.
    """

    def __init__(
        self,
        client: CompletionClient,
        min_latency: float = DEFAULT_MIN_LATENCY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._client = client
        self._min_latency = min_latency
        self._clock = clock
        self._sleep = sleep
        self._now = now
        self._state = AnalysisState()
        self._logger = get_logger(__name__)

    @property
    def state(self) -> AnalysisState:
        return self._state

    def reset(self) -> AnalysisState:
        """Back to IDLE, dropping any previous report."""
        if self._state.status != AnalysisStatus.REQUESTING:
            self._state = AnalysisState()
        return self._state

    async def analyze(self, transactions: Sequence[Transaction]) -> AnalysisState:
        """
        Produce an analysis of the given transactions.

        Never raises. A trigger while a request is already in flight
        is ignored and returns the current state.
        """
        if self._state.status == AnalysisStatus.REQUESTING:
            self._logger.warning("analysis_already_in_progress")
            return self._state

        if not transactions:
            self._state = AnalysisState(
                status=AnalysisStatus.SUCCESS,
                text=NO_DATA_MESSAGE,
                last_updated=self._now(),
            )
            return self._state

        self._state = AnalysisState(status=AnalysisStatus.REQUESTING)
        started = self._clock()
        prompt = build_analysis_prompt(transactions)

        self._logger.info(
            "analysis_requested",
            transaction_count=len(transactions),
            prompt_chars=len(prompt),
        )

        try:
            text = await self._client.complete(prompt)
        except Exception as e:
            self._logger.error(
                "analysis_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            await self._wait_for_floor(started)
            self._state = AnalysisState(
                status=AnalysisStatus.FAILURE,
                error=FAILURE_MESSAGE,
                last_updated=self._now(),
            )
            return self._state

        await self._wait_for_floor(started)

        text = (text or "").strip()
        self._logger.info("analysis_completed", response_chars=len(text))
        self._state = AnalysisState(
            status=AnalysisStatus.SUCCESS,
            text=text or EMPTY_RESPONSE_MESSAGE,
            last_updated=self._now(),
        )
        return self._state

    async def _wait_for_floor(self, started: float) -> None:
        elapsed = self._clock() - started
        if elapsed < self._min_latency:
            await self._sleep(self._min_latency - elapsed)
