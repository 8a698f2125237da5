"""
Error handling module for kutator.

This module provides the error hierarchy used by the review pipeline. Every
error raised while reviewing a request is translated into a denied admission
response; ConfigurationError is only raised while building a webhook.
"""

from .webhook_errors import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    MutationError,
    WebhookError,
)

__all__ = [
    "WebhookError",
    "DecodeError",
    "MutationError",
    "EncodeError",
    "ConfigurationError",
]
