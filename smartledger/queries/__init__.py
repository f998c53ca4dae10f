"""Transaction list queries."""

from smartledger.queries.transactions import (
    TypeFilter,
    TransactionQuery,
    filter_transactions,
    highlight_segments,
    sort_by_date_desc,
)

__all__ = [
    "TypeFilter",
    "TransactionQuery",
    "filter_transactions",
    "highlight_segments",
    "sort_by_date_desc",
]
