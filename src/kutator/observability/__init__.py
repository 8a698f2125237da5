"""
Observability utilities for kutator.

This module provides metrics and structured logging capabilities for
monitoring and troubleshooting admission reviews.
"""

from .logging import ReviewLogger, configure_logging, setup_structured_logging
from .metrics import MetricsCollector, get_metrics_registry

__all__ = [
    "MetricsCollector",
    "get_metrics_registry",
    "ReviewLogger",
    "configure_logging",
    "setup_structured_logging",
]
