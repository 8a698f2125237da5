"""
Webhook error hierarchy with categorization.

This module defines the error types raised by the object resolver, the
mutator chain and the patch generator. All of them are terminal for the
review that raised them and are never retried.
"""

from kutator.constants import (
    CATEGORY_CONFIGURATION,
    CATEGORY_DECODE,
    CATEGORY_ENCODE,
    CATEGORY_MUTATION,
)


class WebhookError(Exception):
    """
    Base error class for all webhook-related exceptions.

    The string form of the error is used verbatim as the reason of a
    denied admission response.
    """

    def __init__(
        self,
        message: str,
        category: str,
        cause: Exception | None = None,
    ):
        """
        Initialize webhook error.

        Args:
            message: Human-readable error description
            category: Error category (decode, mutation, encode, configuration)
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.cause = cause


class DecodeError(WebhookError):
    """The request payload could not be decoded into a known object shape."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message=message, category=CATEGORY_DECODE, cause=cause)


class MutationError(WebhookError):
    """A mutator reported a failure."""

    def __init__(
        self,
        message: str,
        mutator: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message=message, category=CATEGORY_MUTATION, cause=cause)
        self.mutator = mutator


class EncodeError(WebhookError):
    """An object could not be serialized for diffing."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message=message, category=CATEGORY_ENCODE, cause=cause)


class ConfigurationError(WebhookError):
    """Invalid webhook wiring detected at construction time."""

    def __init__(self, message: str, field: str | None = None):
        if field:
            message = f"Configuration error in '{field}': {message}"
        super().__init__(message=message, category=CATEGORY_CONFIGURATION)
