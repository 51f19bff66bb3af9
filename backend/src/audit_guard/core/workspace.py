"""
Audit workspace - the caller side of the scoring contract.

Coordinates risk analysis runs and approve/reject decisions against a
session store. Successful assessments are merged by replacing the stored
record; failed ones leave the store untouched.
"""

from __future__ import annotations

from typing import Optional, Set

from .assessment import AssessmentOutcome, AssessmentSucceeded, RiskAssessmentAdapter
from .errors import AnalysisInProgressError, InvalidTransitionError, TransactionNotFoundError
from .models import Transaction, TransactionStatus
from .observability import DECISIONS_TOTAL, get_logger
from .store import TransactionStore

logger = get_logger(__name__)

FAILURE_MESSAGE = "Failed to generate risk analysis. Please check your API Key or try again."


class AuditWorkspace:
    """
    Session workflow over a :class:`TransactionStore`.

    - Runs risk analysis and merges successful results
    - Records audit decisions (PENDING -> APPROVED/REJECTED)
    - Tracks analyses in flight so a transaction is not scored twice at once
    """

    def __init__(
        self,
        store: TransactionStore,
        adapter: Optional[RiskAssessmentAdapter] = None,
    ):
        self.store = store
        self.adapter = adapter or RiskAssessmentAdapter()
        self._in_flight: Set[str] = set()

    def _require(self, transaction_id: str) -> Transaction:
        transaction = self.store.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(f"transaction {transaction_id!r} not found")
        return transaction

    def is_analyzing(self, transaction_id: str) -> bool:
        return transaction_id in self._in_flight

    async def run_analysis(self, transaction_id: str) -> AssessmentOutcome:
        """Assess a transaction and merge a successful result into the store.

        Args:
            transaction_id: Store id of the transaction to score

        Returns:
            The adapter outcome. On failure the caller should present
            ``FAILURE_MESSAGE`` and let the user retry.

        Raises:
            TransactionNotFoundError: unknown id
            AnalysisInProgressError: an analysis for this id is already running
        """
        transaction = self._require(transaction_id)
        if transaction_id in self._in_flight:
            raise AnalysisInProgressError(f"analysis already running for {transaction_id!r}")

        self._in_flight.add(transaction_id)
        try:
            outcome = await self.adapter.assess(transaction)
        finally:
            self._in_flight.discard(transaction_id)

        if isinstance(outcome, AssessmentSucceeded):
            # Merge into the latest version so a decision taken meanwhile survives
            current = self.store.get_by_id(transaction_id) or transaction
            self.store.replace(current.with_assessment(outcome.assessment))
        return outcome

    def decide(self, transaction_id: str, status: TransactionStatus) -> Transaction:
        """Record an audit decision.

        Repeating the decision already recorded is a no-op.

        Raises:
            TransactionNotFoundError: unknown id
            InvalidTransitionError: target is PENDING, or the record already
                holds the other terminal decision
        """
        status = TransactionStatus(status)
        if not status.is_terminal:
            raise InvalidTransitionError("a decision must be APPROVED or REJECTED")

        transaction = self._require(transaction_id)
        if transaction.status == status:
            return transaction
        if transaction.status.is_terminal:
            raise InvalidTransitionError(
                f"transaction {transaction_id!r} is already {transaction.status.value}"
            )

        updated = transaction.with_status(status)
        self.store.replace(updated)
        DECISIONS_TOTAL.labels(status=status.value).inc()
        logger.info("decision_recorded", transaction_id=transaction_id, status=status.value)
        return updated

    def approve(self, transaction_id: str) -> Transaction:
        return self.decide(transaction_id, TransactionStatus.APPROVED)

    def reject(self, transaction_id: str) -> Transaction:
        return self.decide(transaction_id, TransactionStatus.REJECTED)


__all__ = ["AuditWorkspace", "FAILURE_MESSAGE"]
