"""Monitoring helpers (Sentry, Prometheus)."""
from __future__ import annotations

import logging

import sentry_sdk
from prometheus_client import Counter, Histogram

from building_lens.app.config import Settings

logger = logging.getLogger(__name__)

ANALYSIS_REQUESTS = Counter(
    "building_analysis_requests_total", "Total building analysis requests", labelnames=("endpoint",)
)
ANALYSIS_FAILURES = Counter(
    "building_analysis_failures_total", "Building analyses that ended in an error", labelnames=("endpoint",)
)
ANALYSIS_LATENCY = Histogram(
    "building_analysis_latency_seconds", "Latency of building analyses", labelnames=("endpoint",)
)


def setup_observability(settings: Settings) -> bool:
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment, traces_sample_rate=0.2)
    logger.info("Sentry initialized")
    return True
