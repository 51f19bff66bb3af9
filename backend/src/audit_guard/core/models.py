"""
Data models for the audit workspace.

Contains Pydantic models for:
- Ledger transactions awaiting an audit decision
- Structured risk assessments returned by the scoring capability
- Aggregate dashboard figures
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TransactionStatus(str, Enum):
    """Audit decision state of a transaction."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self != TransactionStatus.PENDING


class RiskLevel(str, Enum):
    """Categorical risk level."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class RiskAssessment(BaseModel):
    """
    Structured output of one scoring invocation.

    Field aliases are the wire names requested from the scoring capability.
    """

    score: float = Field(
        ...,
        alias="risk_score",
        ge=0,
        le=100,
        description="Risk score from 0 to 100 (100 is highest risk)",
    )
    level: RiskLevel = Field(..., alias="risk_level", description="Categorical risk level")
    anomaly_flag: bool = Field(
        ...,
        description="True if the transaction deviates significantly from its category pattern",
    )
    summary: str = Field(
        ...,
        alias="analysis_summary",
        description="Brief professional justification for the score",
    )
    compliance_concerns: Tuple[str, ...] = Field(
        default=(),
        alias="compliance_concern",
        description="Compliance tags, e.g. QuantitativeVariance, PolicyViolation",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "risk_score": 88,
                "risk_level": "HIGH",
                "anomaly_flag": True,
                "analysis_summary": "Amount is ten times the category average and exceeds materiality.",
                "compliance_concern": ["QuantitativeVariance", "MaterialityBreach"],
            }
        },
    )


class Transaction(BaseModel):
    """
    One financial ledger entry awaiting or having received an audit decision.

    Records are immutable; updates produce a new version that replaces the
    old one in the store.
    """

    id: str = Field(..., min_length=1, description="Internal identifier, unique within the store")
    external_reference: str = Field(..., description="Identifier in the source ERP (e.g. UUID)")
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    amount: int = Field(..., description="Amount in whole currency units")
    category: str = Field(..., min_length=1)
    date: dt.date
    historical_average: int = Field(..., description="Historical mean amount for the category")
    materiality_threshold: int = Field(..., description="Amount above which an entry is material")
    status: TransactionStatus = TransactionStatus.PENDING
    risk_assessment: Optional[RiskAssessment] = None

    model_config = ConfigDict(frozen=True)

    def with_assessment(self, assessment: RiskAssessment) -> "Transaction":
        """Return a new version carrying ``assessment`` in place of any prior one."""
        return self.model_copy(update={"risk_assessment": assessment})

    def with_status(self, status: TransactionStatus) -> "Transaction":
        return self.model_copy(update={"status": TransactionStatus(status)})


class DashboardSummary(BaseModel):
    """Aggregate figures over the current working set."""

    total_count: int = Field(..., ge=0)
    count_by_status: Dict[TransactionStatus, int]
    high_risk_count: int = Field(..., ge=0)
    total_amount: int
    count_by_category: Dict[str, int]
    amount_by_category: Dict[str, int]

    @property
    def pending_count(self) -> int:
        return self.count_by_status.get(TransactionStatus.PENDING, 0)

    @property
    def approved_count(self) -> int:
        return self.count_by_status.get(TransactionStatus.APPROVED, 0)

    @property
    def rejected_count(self) -> int:
        return self.count_by_status.get(TransactionStatus.REJECTED, 0)
