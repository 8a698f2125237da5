"""
Structured logging utilities for kutator.

This module provides correlation ID tracking (the admission request UID of
the review being processed), structured log formatting and a review-scoped
logger wrapper.
"""

import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from kutator.constants import CATEGORY_INTERNAL

if TYPE_CHECKING:
    from kutator.settings import Settings

# Context variable for tracking correlation IDs across a review
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

STRUCTURED_FIELDS = (
    "webhook",
    "request_uid",
    "kind",
    "mutator",
    "operation",
    "error_type",
    "category",
    "duration",
    "allowed",
    "patched",
)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Add correlation ID to the log record.

        Args:
            record: The log record to process

        Returns:
            True to allow the record to be processed
        """
        current_correlation_id = get_correlation_id()
        if not current_correlation_id:
            current_correlation_id = set_correlation_id(generate_correlation_id())

        record.correlation_id = current_correlation_id
        return True


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for logs with correlation ID support.

    Formats log records as structured JSON for better parsing and analysis
    in log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as structured JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log message
        """
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def generate_correlation_id() -> str:
    """
    Generate a new correlation ID.

    Returns:
        Unique correlation ID string
    """
    return str(uuid.uuid4())[:8]


def set_correlation_id(corr_id: str) -> str:
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str:
    return correlation_id.get("")


@contextmanager
def correlation_scope(corr_id: str) -> Iterator[str]:
    """Use ``corr_id`` as the correlation ID for the duration of the block."""
    previous = get_correlation_id()
    set_correlation_id(corr_id)
    try:
        yield corr_id
    finally:
        set_correlation_id(previous)


def setup_structured_logging(
    log_level: str = "INFO",
    enable_json_formatting: bool = True,
    correlation_id_enabled: bool = True,
    webhook_log_level: str = "INFO",
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json_formatting: Whether to use JSON formatting
        correlation_id_enabled: Whether to enable correlation ID tracking
        webhook_log_level: Log level for the kutator.webhook loggers
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()

    if enable_json_formatting:
        formatter: logging.Formatter = StructuredFormatter()
    elif correlation_id_enabled:
        formatter = logging.Formatter(
            "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)

    if correlation_id_enabled:
        handler.addFilter(CorrelationIDFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    webhook_level = getattr(logging, webhook_log_level.upper(), logging.INFO)
    logging.getLogger("kutator.webhook").setLevel(webhook_level)


def configure_logging(settings: "Settings") -> None:
    """Configure structured logging from settings."""
    setup_structured_logging(
        log_level=settings.log_level,
        enable_json_formatting=settings.json_logs,
        correlation_id_enabled=settings.correlation_ids,
        webhook_log_level=settings.webhook_log_level,
    )


class ReviewLogger:
    """
    Logger wrapper for admission review events.

    Wraps an injected logging.Logger so the review engine can be given a
    silenced logger without changing its behavior.
    """

    def __init__(self, webhook: str, logger: logging.Logger | None = None):
        """
        Initialize review logger.

        Args:
            webhook: Name of the webhook emitting the events
            logger: Logger to write to (defaults to kutator.webhook.mutating)
        """
        self.webhook = webhook
        self.logger = logger or logging.getLogger("kutator.webhook.mutating")

    def log_review_start(self, request_uid: str) -> None:
        self.logger.debug(
            f"Reviewing request {request_uid} with {self.webhook}",
            extra={
                "webhook": self.webhook,
                "request_uid": request_uid,
                "operation": "review_start",
            },
        )

    def log_review_allowed(
        self,
        request_uid: str,
        kind: str,
        patched: bool,
        duration: float,
    ) -> None:
        outcome = "patched" if patched else "allowed without changes"
        self.logger.info(
            f"Request {request_uid} ({kind}) {outcome}",
            extra={
                "webhook": self.webhook,
                "request_uid": request_uid,
                "kind": kind,
                "operation": "review_allowed",
                "allowed": True,
                "patched": patched,
                "duration": duration,
            },
        )

    def log_review_denied(
        self,
        request_uid: str,
        error: Exception,
        duration: float,
        mutator: str | None = None,
    ) -> None:
        """
        Log a denied review.

        Args:
            request_uid: Admission request UID
            error: The error that caused the denial
            duration: Review duration in seconds
            mutator: Name of the failing mutator, if any
        """
        extra = {
            "webhook": self.webhook,
            "request_uid": request_uid,
            "operation": "review_denied",
            "error_type": type(error).__name__,
            "category": getattr(error, "category", CATEGORY_INTERNAL),
            "allowed": False,
            "duration": duration,
        }
        if mutator:
            extra["mutator"] = mutator

        self.logger.warning(f"Request {request_uid} denied: {error}", extra=extra)

    def log_unexpected_error(self, request_uid: str, error: Exception) -> None:
        self.logger.error(
            f"Unexpected error reviewing request {request_uid}: {error}",
            extra={
                "webhook": self.webhook,
                "request_uid": request_uid,
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )
