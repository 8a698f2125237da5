"""Centralized webhook settings using pydantic-settings.

This module provides a single source of truth for the configuration the
review core consumes, loaded from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Webhook configuration loaded from environment variables.

    All settings have sensible defaults. Override via environment variables
    as documented per field.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )
    correlation_ids: bool = Field(
        default=True,
        validation_alias="CORRELATION_IDS",
        description="Enable correlation IDs (admission request UIDs) in logs",
    )
    webhook_log_level: str = Field(
        default="INFO",
        validation_alias="WEBHOOK_LOG_LEVEL",
        description="Log level for the kutator.webhook loggers",
    )

    # Metrics
    metrics_enabled: bool = Field(
        default=True,
        validation_alias="METRICS_ENABLED",
        description="Record Prometheus metrics for reviews",
    )

    # Review behavior
    review_timeout_seconds: float = Field(
        default=0.0,
        ge=0,
        validation_alias="REVIEW_TIMEOUT_SECONDS",
        description=(
            "Deadline applied to a review when the caller supplies no context "
            "(0 disables the deadline)"
        ),
    )


# Global settings instance - initialized once at module import
settings = Settings()
