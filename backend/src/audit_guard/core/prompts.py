"""
Prompt templates and response schema for transaction risk scoring.

The heuristics listed in the prompt are guidance for the scoring model. No
deviation ratio or threshold comparison is computed locally.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Any, Dict

from .config import Settings
from .models import RiskLevel, Transaction


SYSTEM_INSTRUCTION = (
    "You are a Financial Audit Compliance Specialist. Your task is to assess the "
    "risk of financial transactions based on the data provided. Give an objective "
    "assessment grounded in internal audit standards (COSO/ISA)."
)


RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "risk_score": {
            "type": "number",
            "minimum": 0,
            "maximum": 100,
            "description": "Risk score from 0 to 100 (100 is highest risk)",
        },
        "risk_level": {
            "type": "string",
            "enum": [level.value for level in RiskLevel],
            "description": "Categorical risk level",
        },
        "anomaly_flag": {
            "type": "boolean",
            "description": "True if the transaction deviates significantly from patterns",
        },
        "analysis_summary": {
            "type": "string",
            "description": "Brief professional justification for the score (Max 2 sentences)",
        },
        "compliance_concern": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of specific compliance tags (e.g. 'QuantitativeVariance', 'PolicyViolation')",
        },
    },
    "required": [
        "risk_score",
        "risk_level",
        "anomaly_flag",
        "analysis_summary",
        "compliance_concern",
    ],
}


RISK_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    Analyze the following financial transaction for audit compliance risk.

    Transaction Data:
    - Title: {title}
    - Amount: {currency} {amount}
    - Category: {category}
    - Description: {description}
    - Historical Average for Category: {currency} {historical_average}
    - Materiality Threshold: {currency} {materiality_threshold}

    Context & Rules:
    1. Compare Amount vs Historical Average. Significant deviation suggests anomaly.
    2. Analyze text (Title/Description) for high-risk keywords (e.g., vague descriptions, high-risk entertainment, unknown vendors).
    3. If Amount > Materiality Threshold, risk increases.
    4. Return a structured risk assessment.
    """
)


@dataclass(frozen=True)
class ScoringRequest:
    """Everything the scoring capability needs for one invocation."""

    transaction_id: str
    prompt: str
    system_instruction: str
    response_schema: Dict[str, Any]
    model: str
    temperature: float


def build_risk_prompt(transaction: Transaction, currency: str = "IDR") -> str:
    """Render the natural-language description of ``transaction``."""
    return RISK_PROMPT_TEMPLATE.format(
        title=transaction.title,
        currency=currency,
        amount=transaction.amount,
        category=transaction.category,
        description=transaction.description,
        historical_average=transaction.historical_average,
        materiality_threshold=transaction.materiality_threshold,
    )


def build_scoring_request(transaction: Transaction, settings: Settings) -> ScoringRequest:
    return ScoringRequest(
        transaction_id=transaction.id,
        prompt=build_risk_prompt(transaction, settings.currency),
        system_instruction=SYSTEM_INSTRUCTION,
        response_schema=RESPONSE_SCHEMA,
        model=settings.gemini_model,
        temperature=settings.gemini_temperature,
    )


__all__ = [
    "RESPONSE_SCHEMA",
    "SYSTEM_INSTRUCTION",
    "ScoringRequest",
    "build_risk_prompt",
    "build_scoring_request",
]
