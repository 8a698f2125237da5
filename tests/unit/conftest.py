"""Shared pytest fixtures for webhook tests."""

import logging

import pytest

from kutator.models.admission import AdmissionRequest
from kutator.models.core import Pod
from kutator.observability.metrics import MetricsCollector
from kutator.webhook.mutating import MutatingWebhook
from tests.fixtures.kubernetes_objects import POD, to_payload


@pytest.fixture
def silent_logger():
    """A logger that drops every record."""
    logger = logging.getLogger("kutator.tests.silent")
    logger.disabled = True
    return logger


@pytest.fixture
def disabled_metrics():
    return MetricsCollector(enabled=False)


@pytest.fixture
def pod_request():
    return AdmissionRequest(uid="test", object=to_payload(POD))


@pytest.fixture(params=["static", "dynamic"])
def webhook_factory(request, silent_logger, disabled_metrics):
    """Build a Pod webhook in both resolution modes."""

    def factory(mutator):
        if request.param == "static":
            return MutatingWebhook.static(
                mutator, Pod, logger=silent_logger, metrics=disabled_metrics
            )
        return MutatingWebhook.dynamic(
            mutator, logger=silent_logger, metrics=disabled_metrics
        )

    return factory

