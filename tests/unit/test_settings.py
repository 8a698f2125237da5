"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from kutator.models.core import Pod
from kutator.settings import Settings
from kutator.webhook.mutating import MutatingWebhook


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("LOG_LEVEL", "JSON_LOGS", "METRICS_ENABLED", "REVIEW_TIMEOUT_SECONDS"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.json_logs is True
        assert settings.metrics_enabled is True
        assert settings.review_timeout_seconds == 0.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("JSON_LOGS", "false")
        monkeypatch.setenv("REVIEW_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.json_logs is False
        assert settings.review_timeout_seconds == 2.5

    def test_negative_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("REVIEW_TIMEOUT_SECONDS", "-1")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestWebhookTimeout:
    def test_zero_disables_deadline(self, silent_logger, disabled_metrics):
        webhook = MutatingWebhook.static(
            lambda ctx, obj: False,
            Pod,
            logger=silent_logger,
            metrics=disabled_metrics,
            review_timeout=0,
        )

        assert webhook.review_timeout is None

    def test_explicit_timeout(self, silent_logger, disabled_metrics):
        webhook = MutatingWebhook.static(
            lambda ctx, obj: False,
            Pod,
            logger=silent_logger,
            metrics=disabled_metrics,
            review_timeout=3,
        )

        assert webhook.review_timeout == 3

    def test_no_deadline_by_default(
        self, silent_logger, disabled_metrics, monkeypatch
    ):
        monkeypatch.delenv("REVIEW_TIMEOUT_SECONDS", raising=False)
        monkeypatch.setattr("kutator.webhook.mutating.settings", Settings(_env_file=None))

        webhook = MutatingWebhook.static(
            lambda ctx, obj: False, Pod, logger=silent_logger, metrics=disabled_metrics
        )

        assert webhook.review_timeout is None
