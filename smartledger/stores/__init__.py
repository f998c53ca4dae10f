"""In-memory stores: the single source of truth for one session."""

from smartledger.stores.budgets import BudgetStore
from smartledger.stores.transactions import TransactionStore

__all__ = [
    "BudgetStore",
    "TransactionStore",
]
