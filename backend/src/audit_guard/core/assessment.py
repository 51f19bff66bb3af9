"""
Risk assessment adapter.

Builds a scoring request from a transaction, invokes the external scoring
capability, validates the structured response and returns a typed outcome.
Failures are returned as values; the adapter never retries and never writes
to a store.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Protocol, Tuple, Union

from ..adapters.gemini import GeminiScoringClient
from .config import Settings, load_settings
from .errors import ResponseValidationError, ScoringTransportError, TransportReason
from .models import RiskAssessment, Transaction
from .observability import ASSESSMENT_LATENCY, ASSESSMENT_OUTCOMES, get_logger
from .prompts import ScoringRequest, build_scoring_request
from .validation import expected_level_for_score, parse_risk_assessment

logger = get_logger(__name__)


class FailureKind(str, Enum):
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"
    TRANSPORT_FAILURE = "TransportFailure"


class ScoringCapability(Protocol):
    """External scoring provider.

    ``generate`` returns the raw response payload (``None`` when the provider
    produced nothing) and raises :class:`ScoringTransportError` when it
    cannot be reached. Any other exception is reported by the adapter as a
    transport failure with reason ``unknown``.
    """

    async def generate(self, request: ScoringRequest) -> Optional[str]:
        ...


@dataclass(frozen=True)
class AssessmentSucceeded:
    assessment: RiskAssessment

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class AssessmentFailed:
    """
    A scoring attempt that produced no usable assessment.

    Attributes:
        kind: Failure category
        message: Diagnostic detail (not meant for end users)
        reason: Transport sub-cause, set only for transport failures
        errors: Field-level validation errors for malformed responses
    """

    kind: FailureKind
    message: str
    reason: Optional[TransportReason] = None
    errors: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    ok: ClassVar[bool] = False


AssessmentOutcome = Union[AssessmentSucceeded, AssessmentFailed]


class RiskAssessmentAdapter:
    """Translate transactions into scoring calls and responses into outcomes."""

    def __init__(
        self,
        capability: Optional[ScoringCapability] = None,
        *,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or load_settings()
        self.capability = capability or GeminiScoringClient(self.settings)

    async def assess(self, transaction: Transaction) -> AssessmentOutcome:
        """Request a risk assessment for ``transaction``.

        Every call performs a fresh external invocation. An explicit timeout
        (``gemini_timeout_seconds``) bounds the wait. Any error raised by the
        capability comes back as a ``TransportFailure``.
        """
        request = build_scoring_request(transaction, self.settings)
        log = logger.bind(transaction_id=transaction.id, model=request.model)
        log.info("assessment_requested")

        start = time.perf_counter()
        try:
            payload = await asyncio.wait_for(
                self.capability.generate(request),
                timeout=self.settings.gemini_timeout_seconds,
            )
        except ScoringTransportError as exc:
            return self._failed(
                log,
                AssessmentFailed(
                    kind=FailureKind.TRANSPORT_FAILURE,
                    message=str(exc),
                    reason=exc.reason,
                ),
            )
        except asyncio.TimeoutError:
            return self._failed(
                log,
                AssessmentFailed(
                    kind=FailureKind.TRANSPORT_FAILURE,
                    message=f"No response within {self.settings.gemini_timeout_seconds}s",
                    reason=TransportReason.TIMEOUT,
                ),
            )
        except Exception as exc:
            log.warning("scoring_capability_error", error_type=type(exc).__name__, exc_info=True)
            return self._failed(
                log,
                AssessmentFailed(
                    kind=FailureKind.TRANSPORT_FAILURE,
                    message=f"{type(exc).__name__}: {exc}",
                    reason=TransportReason.UNKNOWN,
                ),
            )
        finally:
            ASSESSMENT_LATENCY.observe(time.perf_counter() - start)

        if payload is None or not payload.strip():
            return self._failed(
                log,
                AssessmentFailed(kind=FailureKind.EMPTY_RESPONSE, message="Empty response from scoring service"),
            )

        try:
            assessment = parse_risk_assessment(payload)
        except ResponseValidationError as exc:
            return self._failed(
                log,
                AssessmentFailed(
                    kind=FailureKind.MALFORMED_RESPONSE,
                    message=str(exc),
                    errors=tuple(exc.errors),
                ),
            )

        expected = expected_level_for_score(assessment.score)
        if expected != assessment.level:
            log.warning(
                "assessment_level_inconsistent",
                score=assessment.score,
                level=assessment.level.value,
                expected_level=expected.value,
            )

        ASSESSMENT_OUTCOMES.labels(outcome="success").inc()
        log.info(
            "assessment_completed",
            score=assessment.score,
            level=assessment.level.value,
            anomaly_flag=assessment.anomaly_flag,
        )
        return AssessmentSucceeded(assessment)

    @staticmethod
    def _failed(log, failure: AssessmentFailed) -> AssessmentFailed:
        ASSESSMENT_OUTCOMES.labels(outcome=failure.kind.value).inc()
        log.warning(
            "assessment_failed",
            kind=failure.kind.value,
            reason=failure.reason.value if failure.reason else None,
            detail=failure.message,
        )
        return failure


__all__ = [
    "AssessmentFailed",
    "AssessmentOutcome",
    "AssessmentSucceeded",
    "FailureKind",
    "RiskAssessmentAdapter",
    "ScoringCapability",
]
