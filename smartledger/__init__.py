"""
SmartLedger - Source Package

A personal finance tracker: record income and expenses, watch
per-category monthly budgets, and ask an AI advisor for a short
narrative analysis of your spending.

DESIGN PRINCIPLES:
1. Aggregations are pure functions of the transaction log
2. Stores are the single source of truth, persisted as full snapshots
3. Storage and AI failures degrade to a message, never a crash
4. Storage and AI backends are swappable
"""

__version__ = "1.0.0"
__author__ = "SmartLedger Team"
