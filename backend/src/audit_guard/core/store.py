"""In-memory transaction store for one audit session."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .errors import DuplicateTransactionError
from .models import DashboardSummary, RiskLevel, Transaction, TransactionStatus
from .observability import get_logger

logger = get_logger(__name__)

StoreListener = Callable[[Transaction, Transaction], None]


class TransactionStore:
    """
    Insertion-ordered working set of transactions.

    Records are replaced wholesale, never edited or deleted. Aggregate views
    are recomputed from the current records on every read. Single-writer:
    no locking is performed.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._records: List[Transaction] = []
        self._index: Dict[str, int] = {}
        self._listeners: List[StoreListener] = []

        for transaction in transactions:
            if transaction.id in self._index:
                raise DuplicateTransactionError(f"duplicate transaction id {transaction.id!r}")
            self._index[transaction.id] = len(self._records)
            self._records.append(transaction)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._index

    def get_all(self) -> Tuple[Transaction, ...]:
        return tuple(self._records)

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        position = self._index.get(transaction_id)
        if position is None:
            return None
        return self._records[position]

    def replace(self, updated: Transaction) -> bool:
        """Swap the record whose id matches ``updated.id``.

        Returns False and leaves the store unchanged when no record matches.
        """
        position = self._index.get(updated.id)
        if position is None:
            logger.warning("replace_unmatched", transaction_id=updated.id)
            return False

        previous = self._records[position]
        self._records[position] = updated
        logger.debug(
            "transaction_replaced",
            transaction_id=updated.id,
            status=updated.status.value,
            assessed=updated.risk_assessment is not None,
        )
        for listener in list(self._listeners):
            listener(previous, updated)
        return True

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Call ``listener(previous, updated)`` after each replace. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def search(self, query: str) -> Tuple[Transaction, ...]:
        """Case-insensitive match on id, external reference or title."""
        needle = query.strip().lower()
        if not needle:
            return self.get_all()
        return tuple(
            t
            for t in self._records
            if needle in t.id.lower()
            or needle in t.external_reference.lower()
            or needle in t.title.lower()
        )

    # Derived views

    def count_by_status(self) -> Dict[TransactionStatus, int]:
        counts = {status: 0 for status in TransactionStatus}
        for t in self._records:
            counts[t.status] += 1
        return counts

    def pending_count(self) -> int:
        return sum(1 for t in self._records if t.status == TransactionStatus.PENDING)

    def high_risk_count(self) -> int:
        return sum(
            1
            for t in self._records
            if t.risk_assessment is not None and t.risk_assessment.level == RiskLevel.HIGH
        )

    def total_amount(self) -> int:
        return sum(t.amount for t in self._records)

    def count_by_category(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for t in self._records:
            counts[t.category] = counts.get(t.category, 0) + 1
        return counts

    def amount_by_category(self) -> Dict[str, int]:
        amounts: Dict[str, int] = {}
        for t in self._records:
            amounts[t.category] = amounts.get(t.category, 0) + t.amount
        return amounts

    def summary(self) -> DashboardSummary:
        return DashboardSummary(
            total_count=len(self._records),
            count_by_status=self.count_by_status(),
            high_risk_count=self.high_risk_count(),
            total_amount=self.total_amount(),
            count_by_category=self.count_by_category(),
            amount_by_category=self.amount_by_category(),
        )


__all__ = ["StoreListener", "TransactionStore"]
