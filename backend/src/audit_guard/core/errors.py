"""
Custom exception classes for Audit Guard.

Defines specific error types for different failure scenarios. Scoring
failures are reported to callers as outcome values; these exceptions carry
them across the internal seams.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List


class TransportReason(str, Enum):
    """Why the scoring capability could not be used."""

    AUTHENTICATION = "authentication"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    NETWORK = "network"
    UPSTREAM = "upstream"
    REQUEST_REJECTED = "request_rejected"
    UNKNOWN = "unknown"


class AuditGuardError(Exception):
    """Base exception for all Audit Guard errors."""

    pass


class SettingsError(AuditGuardError):
    """Raised when configuration cannot be loaded."""

    pass


class ScoringTransportError(AuditGuardError):
    """Raised when the scoring capability is unreachable or refuses the call."""

    def __init__(
        self,
        message: str,
        *,
        reason: TransportReason = TransportReason.UNKNOWN,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code


class ResponseValidationError(AuditGuardError):
    """Raised when a scoring payload does not match the risk assessment shape."""

    def __init__(self, message: str, *, errors: List[Dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class TransactionNotFoundError(AuditGuardError):
    """Raised when a transaction id is not present in the store."""

    pass


class DuplicateTransactionError(AuditGuardError):
    """Raised when a store is seeded with two records sharing an id."""

    pass


class InvalidTransitionError(AuditGuardError):
    """Raised when an audit decision is not allowed from the current status."""

    pass


class AnalysisInProgressError(AuditGuardError):
    """Raised when an analysis is requested while one is already running."""

    pass


def reason_for_status(status_code: int | None) -> TransportReason:
    """Map an HTTP status code reported by the provider to a transport reason."""
    if status_code is None:
        return TransportReason.UNKNOWN
    if status_code in (401, 403):
        return TransportReason.AUTHENTICATION
    if status_code == 429:
        return TransportReason.RATE_LIMITED
    if status_code in (408, 504):
        return TransportReason.TIMEOUT
    if status_code >= 500:
        return TransportReason.UPSTREAM
    if status_code >= 400:
        return TransportReason.REQUEST_REJECTED
    return TransportReason.UNKNOWN
