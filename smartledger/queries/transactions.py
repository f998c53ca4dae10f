"""
Transaction List Queries

Read-time ordering, search and filtering for the transaction list view.
Like the aggregation engine these are pure functions over a snapshot;
the store itself stays in insertion order.
"""

import re
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartledger.models.category import get_category
from smartledger.models.ledger import Transaction


class TypeFilter(str, Enum):
    """Type tabs on the transaction list."""
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


class TransactionQuery(BaseModel):
    """Search term plus type tab, as entered on the list view."""
    model_config = ConfigDict(frozen=True)

    search: str = Field(default="", max_length=100)
    type_filter: TypeFilter = TypeFilter.ALL

    @property
    def is_empty(self) -> bool:
        return not self.search.strip() and self.type_filter == TypeFilter.ALL


def sort_by_date_desc(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Newest date first.

    The sort is stable, so same-day transactions keep store order
    (most recently added first).
    """
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def _matches_search(transaction: Transaction, term: str) -> bool:
    """Case-insensitive substring match on the note or the category label."""
    category = get_category(transaction.category)
    label = category.label if category else ""
    return term in transaction.note.lower() or term in label.lower()


def filter_transactions(
    transactions: Iterable[Transaction],
    query: Optional[TransactionQuery] = None,
) -> list[Transaction]:
    """
    Sorted, filtered view of the transaction list.

    1. Sort by date, newest first
    2. Keep only the selected type (unless "all")
    3. Keep only transactions whose note or category label contains
       the search term (blank term matches everything)
    """
    query = query or TransactionQuery()
    term = query.search.strip().lower()

    results = []
    for t in sort_by_date_desc(transactions):
        if query.type_filter != TypeFilter.ALL and t.type.value != query.type_filter.value:
            continue
        if term and not _matches_search(t, term):
            continue
        results.append(t)
    return results


def highlight_segments(text: str, term: str) -> list[tuple[str, bool]]:
    """
    Split text into (segment, is_match) pairs for search highlighting.

    Matching is case-insensitive; the original casing is preserved.
    """
    if not term.strip():
        return [(text, False)] if text else []

    parts = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    return [
        (part, part.lower() == term.lower())
        for part in parts
        if part
    ]
