"""
Audit Guard

Transaction audit workspace: AI risk scoring of ledger entries and
approve/reject decisions over an in-memory session store.
"""

__version__ = "0.1.0"

from .core.assessment import (
    AssessmentFailed,
    AssessmentOutcome,
    AssessmentSucceeded,
    FailureKind,
    RiskAssessmentAdapter,
)
from .core.config import Settings, load_settings
from .core.models import RiskAssessment, RiskLevel, Transaction, TransactionStatus
from .core.store import TransactionStore
from .core.workspace import AuditWorkspace

__all__ = [
    "AssessmentFailed",
    "AssessmentOutcome",
    "AssessmentSucceeded",
    "AuditWorkspace",
    "FailureKind",
    "RiskAssessment",
    "RiskAssessmentAdapter",
    "RiskLevel",
    "Settings",
    "Transaction",
    "TransactionStatus",
    "TransactionStore",
    "load_settings",
]
