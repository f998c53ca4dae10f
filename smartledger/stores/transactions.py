"""
Transaction Store

An ordered collection of transactions. Newest insertions come first;
chronological sorting is a read-time concern of the list view and the
aggregation engine, not an invariant of the store.
"""

from typing import Iterable, Iterator, Optional

from smartledger.models.ledger import Transaction, TransactionDraft


class TransactionStore:
    """
    Insert, delete and full-scan access to the transaction log.

    There is no edit operation: an update is a delete followed by an add.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: list[Transaction] = list(transactions or [])

    def add(self, candidate: TransactionDraft) -> Transaction:
        """
        Assign a fresh id to the candidate and prepend it.

        Input is assumed to be validated already by the caller.
        """
        transaction = Transaction.from_draft(candidate)
        self._transactions.insert(0, transaction)
        return transaction

    def remove(self, transaction_id: str) -> bool:
        """
        Remove the transaction with this id.

        Returns False (and changes nothing) if no such transaction exists.
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return False
        self._transactions = remaining
        return True

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def all(self) -> tuple[Transaction, ...]:
        """Read-only snapshot in store order."""
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.all())
