"""AI Agents package."""

from smartledger.agents.advisor import (
    EMPTY_RESPONSE_MESSAGE,
    FAILURE_MESSAGE,
    NO_DATA_MESSAGE,
    AnalysisState,
    AnalysisStatus,
    FinancialAdvisor,
    build_analysis_prompt,
    build_transaction_summary,
    format_transaction_line,
)
from smartledger.agents.completion import (
    CompletionClient,
    CompletionUnavailableError,
    GeminiCompletionClient,
    UnconfiguredCompletionClient,
)

__all__ = [
    "EMPTY_RESPONSE_MESSAGE",
    "FAILURE_MESSAGE",
    "NO_DATA_MESSAGE",
    "AnalysisState",
    "AnalysisStatus",
    "CompletionClient",
    "CompletionUnavailableError",
    "FinancialAdvisor",
    "GeminiCompletionClient",
    "UnconfiguredCompletionClient",
    "build_analysis_prompt",
    "build_transaction_summary",
    "format_transaction_line",
]
