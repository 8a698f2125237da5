"""
Prometheus metrics for kutator.

This module provides metrics collection for admission reviews: outcomes,
durations, failures by error type and emitted patches. Exposition over HTTP
is left to the server layer hosting the webhook.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from kutator.constants import RESULT_ALLOWED, RESULT_DENIED, RESULT_PATCHED

# Global metrics registry
_metrics_registry: CollectorRegistry | None = None

# Metrics definitions
REVIEWS_TOTAL = Counter(
    "kutator_reviews_total",
    "Total number of admission reviews by result",
    ["webhook", "result"],
    registry=None,  # Registered in get_metrics_registry()
)

REVIEW_DURATION = Histogram(
    "kutator_review_duration_seconds",
    "Time spent reviewing admission requests",
    ["webhook"],
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5, 1.0],
    registry=None,
)

REVIEW_ERRORS = Counter(
    "kutator_review_errors_total",
    "Total number of denied reviews by error type",
    ["webhook", "error_type"],
    registry=None,
)

PATCHES_TOTAL = Counter(
    "kutator_patches_total",
    "Total number of responses carrying a change document",
    ["webhook"],
    registry=None,
)


def get_metrics_registry() -> CollectorRegistry:
    """Get or create the global metrics registry."""
    global _metrics_registry

    if _metrics_registry is None:
        _metrics_registry = CollectorRegistry()
        for metric in [REVIEWS_TOTAL, REVIEW_DURATION, REVIEW_ERRORS, PATCHES_TOTAL]:
            _metrics_registry.register(metric)

    return _metrics_registry


def render_metrics() -> bytes:
    """Return the Prometheus text exposition of all kutator metrics."""
    return generate_latest(get_metrics_registry())


class ReviewOutcome:
    """Mutable holder the review engine fills in while tracked."""

    def __init__(self) -> None:
        self.result = RESULT_DENIED
        self.error_type: str | None = None

    def allowed(self, patched: bool) -> None:
        self.result = RESULT_PATCHED if patched else RESULT_ALLOWED

    def denied(self, error: Exception) -> None:
        self.result = RESULT_DENIED
        self.error_type = type(error).__name__


class MetricsCollector:
    """Collects and manages metrics for admission reviews."""

    def __init__(self, enabled: bool = True):
        """
        Initialize metrics collector.

        Args:
            enabled: When False, every recording method is a no-op
        """
        self.enabled = enabled
        self.registry = get_metrics_registry() if enabled else None

    @contextmanager
    def track_review(self, webhook: str) -> Iterator[ReviewOutcome]:
        """
        Context manager to track one review.

        Args:
            webhook: Name of the webhook performing the review

        Yields:
            ReviewOutcome to be marked allowed or denied by the caller
        """
        outcome = ReviewOutcome()
        start_time = time.perf_counter()
        try:
            yield outcome
        finally:
            self.record_review(
                webhook, outcome, time.perf_counter() - start_time
            )

    def record_review(
        self, webhook: str, outcome: ReviewOutcome, duration: float
    ) -> None:
        if not self.enabled:
            return

        REVIEWS_TOTAL.labels(webhook=webhook, result=outcome.result).inc()
        REVIEW_DURATION.labels(webhook=webhook).observe(duration)

        if outcome.result == RESULT_PATCHED:
            PATCHES_TOTAL.labels(webhook=webhook).inc()
        elif outcome.error_type:
            REVIEW_ERRORS.labels(
                webhook=webhook, error_type=outcome.error_type
            ).inc()
