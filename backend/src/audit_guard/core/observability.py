"""Observability helpers (logging + Prometheus metrics)."""

from __future__ import annotations

import logging
import sys

import structlog
from prometheus_client import CollectorRegistry, Counter, Histogram


# Prometheus metrics registry
registry = CollectorRegistry()

ASSESSMENT_OUTCOMES = Counter(
    "audit_guard_assessments_total",
    "Risk assessment calls by outcome",
    labelnames=("outcome",),
    registry=registry,
)

ASSESSMENT_LATENCY = Histogram(
    "audit_guard_assessment_seconds",
    "Latency of risk assessment calls",
    buckets=(0.25, 0.5, 1, 2, 5, 10, 30),
    registry=registry,
)

DECISIONS_TOTAL = Counter(
    "audit_guard_decisions_total",
    "Audit decisions recorded",
    labelnames=("status",),
    registry=registry,
)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Initialise structlog for JSON (default) or console output."""

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Quieten SDK transport chatter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


__all__ = [
    "ASSESSMENT_LATENCY",
    "ASSESSMENT_OUTCOMES",
    "DECISIONS_TOTAL",
    "configure_logging",
    "get_logger",
    "registry",
]
