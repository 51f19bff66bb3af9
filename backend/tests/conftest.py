"""Pytest configuration and shared fixtures for Audit Guard tests."""

import asyncio
import json
from datetime import date

import pytest

from audit_guard.core import config
from audit_guard.core.assessment import RiskAssessmentAdapter
from audit_guard.core.config import Settings
from audit_guard.core.models import RiskAssessment, RiskLevel, Transaction, TransactionStatus
from audit_guard.core.store import TransactionStore


class StubScoringCapability:
    """Scoring capability double that returns a canned payload or raises."""

    def __init__(self, payload=None, *, error=None, delay=0.0):
        self.payload = payload
        self.error = error
        self.delay = delay
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch):
    """Keep cached settings from leaking between tests."""
    monkeypatch.setattr(config, "_CACHED_SETTINGS", None)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_api_key="test-key",
        gemini_timeout_seconds=1.0,
    )


@pytest.fixture
def high_risk_payload():
    return {
        "risk_score": 88,
        "risk_level": "HIGH",
        "anomaly_flag": True,
        "analysis_summary": "Amount is ten times the category average and exceeds materiality.",
        "compliance_concern": ["QuantitativeVariance"],
    }


@pytest.fixture
def high_risk_assessment(high_risk_payload):
    return RiskAssessment.model_validate(high_risk_payload)


@pytest.fixture
def low_risk_assessment():
    return RiskAssessment(
        score=12,
        level=RiskLevel.LOW,
        anomaly_flag=False,
        summary="Routine purchase in line with history.",
        compliance_concerns=(),
    )


@pytest.fixture
def sample_transaction():
    """Entertainment expense ten times its category average."""
    return Transaction(
        id="t1",
        external_reference="8f14e45f-ea3b-4c1a-9d2b-1f0c3a7e5b21",
        title="Client Entertainment - Jakarta",
        description="Dinner and karaoke with vendor representatives.",
        amount=50_000_000,
        category="Entertainment",
        date=date(2024, 5, 12),
        historical_average=5_000_000,
        materiality_threshold=10_000_000,
    )


@pytest.fixture
def make_transaction(sample_transaction):
    """Factory deriving variants of the sample transaction."""

    def _make(**overrides):
        return sample_transaction.model_copy(update=overrides)

    return _make


@pytest.fixture
def store(make_transaction):
    return TransactionStore(
        [
            make_transaction(id="t1"),
            make_transaction(
                id="t2",
                external_reference="c9f0f895-fb98-4b9e-8b2d-6a1d2e3f4a51",
                title="Office Stationery Restock",
                category="Office Supplies",
                amount=4_250_000,
                status=TransactionStatus.APPROVED,
            ),
            make_transaction(
                id="t3",
                external_reference="45c48cce-2e2d-4fbd-a7a1-3c4d5e6f7a82",
                title="Team Offsite Catering",
                amount=12_800_000,
            ),
        ]
    )


@pytest.fixture
def stub_capability(high_risk_payload):
    return StubScoringCapability(json.dumps(high_risk_payload))


@pytest.fixture
def adapter(stub_capability, settings):
    return RiskAssessmentAdapter(stub_capability, settings=settings)


@pytest.fixture
def make_capability():
    """Factory for stub scoring capabilities."""
    return StubScoringCapability
