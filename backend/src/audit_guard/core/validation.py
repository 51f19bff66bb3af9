"""Validation helpers for scoring responses."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from jsonschema import Draft202012Validator
from pydantic import ValidationError

from .errors import ResponseValidationError
from .models import RiskAssessment, RiskLevel
from .prompts import RESPONSE_SCHEMA

_VALIDATOR = Draft202012Validator(RESPONSE_SCHEMA)


def _format_errors(errors) -> List[Dict[str, Any]]:
    return [
        {
            "path": list(error.path),
            "message": error.message,
            "validator": error.validator,
        }
        for error in errors
    ]


def parse_risk_assessment(payload: str) -> RiskAssessment:
    """Decode and validate a scoring payload into a :class:`RiskAssessment`.

    Raises:
        ResponseValidationError: payload is not JSON, or fails the response
            schema (missing field, wrong type, unknown level, score out of range)
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise ResponseValidationError(
            "Scoring payload is not valid JSON",
            errors=[{"path": [], "message": str(exc), "validator": "json"}],
        ) from exc

    if not isinstance(data, dict):
        raise ResponseValidationError(
            "Scoring payload is not a JSON object",
            errors=[{"path": [], "message": f"got {type(data).__name__}", "validator": "type"}],
        )

    errors = sorted(_VALIDATOR.iter_errors(data), key=lambda err: list(err.path))
    if errors:
        raise ResponseValidationError("Scoring payload failed validation", errors=_format_errors(errors))

    known = {key: data[key] for key in RESPONSE_SCHEMA["properties"]}
    try:
        return RiskAssessment.model_validate(known)
    except ValidationError as exc:
        raise ResponseValidationError(
            "Scoring payload failed validation",
            errors=[
                {"path": list(err["loc"]), "message": err["msg"], "validator": err["type"]}
                for err in exc.errors()
            ],
        ) from exc


def expected_level_for_score(score: float) -> RiskLevel:
    """Level implied by ``score`` (<30 low, <60 medium, otherwise high)."""
    if score < 30:
        return RiskLevel.LOW
    if score < 60:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


__all__ = [
    "ResponseValidationError",
    "expected_level_for_score",
    "parse_risk_assessment",
]
