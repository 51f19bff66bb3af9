"""Unit tests for logging and metrics helpers."""

import pytest
import structlog

from audit_guard.core.assessment import RiskAssessmentAdapter
from audit_guard.core.observability import configure_logging, get_logger, registry
from audit_guard.core.workspace import AuditWorkspace


def _sample(name, labels):
    return registry.get_sample_value(name, labels) or 0.0


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_configure_logging_text_format(restore_structlog):
    configure_logging("debug", json_format=False)
    assert structlog.is_configured()
    get_logger("audit_guard.test").info("configured", renderer="console")


def test_configure_logging_unknown_level_falls_back(restore_structlog):
    configure_logging("verbose")
    assert structlog.is_configured()


@pytest.mark.asyncio
async def test_failed_assessment_is_counted(make_capability, settings, sample_transaction):
    labels = {"outcome": "EmptyResponse"}
    before = _sample("audit_guard_assessments_total", labels)

    await RiskAssessmentAdapter(make_capability(None), settings=settings).assess(sample_transaction)

    assert _sample("audit_guard_assessments_total", labels) == before + 1


@pytest.mark.asyncio
async def test_successful_assessment_is_counted_and_timed(adapter, sample_transaction):
    before = _sample("audit_guard_assessments_total", {"outcome": "success"})
    observed = _sample("audit_guard_assessment_seconds_count", {})

    await adapter.assess(sample_transaction)

    assert _sample("audit_guard_assessments_total", {"outcome": "success"}) == before + 1
    assert _sample("audit_guard_assessment_seconds_count", {}) == observed + 1


def test_decision_is_counted(store, adapter):
    before = _sample("audit_guard_decisions_total", {"status": "REJECTED"})

    AuditWorkspace(store, adapter).reject("t1")

    assert _sample("audit_guard_decisions_total", {"status": "REJECTED"}) == before + 1
