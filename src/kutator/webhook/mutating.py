"""
Mutating admission webhook review engine.

The engine takes an admission request through a fixed sequence of steps and
always returns a response:

1. decode the payload with the configured resolver,
2. snapshot the decoded object's serialized form,
3. run the mutator against the object,
4. diff the snapshot against the mutated serialized form,
5. answer allowed (with a patch when something changed) or denied.

Decode, mutation and encode failures deny the request with the error message
as the reason and never carry a patch. The engine holds no per-review state,
so one webhook can serve concurrent reviews.
"""

import time
from collections.abc import Callable
from logging import Logger

from pydantic_core import PydanticSerializationError

from kutator.constants import (
    DEFAULT_DYNAMIC_WEBHOOK_NAME,
    DEFAULT_STATIC_WEBHOOK_NAME,
    PATCH_TYPE_JSON_PATCH,
)
from kutator.errors import (
    ConfigurationError,
    EncodeError,
    MutationError,
    WebhookError,
)
from kutator.models.admission import AdmissionRequest, AdmissionResponse
from kutator.models.meta import KubernetesObject
from kutator.observability.logging import ReviewLogger, correlation_scope
from kutator.observability.metrics import MetricsCollector
from kutator.settings import settings
from kutator.webhook.context import ReviewContext
from kutator.webhook.mutator import Mutator, MutatorChain, MutatorFunc
from kutator.webhook.patch import create_merge_patch, encode_patch
from kutator.webhook.resolver import (
    DynamicResolver,
    ObjectResolver,
    StaticResolver,
    TypeCatalog,
    default_catalog,
)

MutatorLike = Mutator | Callable[[ReviewContext, KubernetesObject], bool]


def _as_chain(mutator: MutatorLike) -> MutatorChain:
    if isinstance(mutator, MutatorChain):
        return mutator
    if hasattr(mutator, "mutate"):
        return MutatorChain(mutator)
    if callable(mutator):
        return MutatorChain(MutatorFunc(mutator))
    raise ConfigurationError(
        f"{mutator!r} is neither a Mutator nor a callable", field="mutator"
    )


def _encode(obj: KubernetesObject) -> bytes:
    try:
        return obj.to_json()
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodeError(
            f"could not encode {type(obj).__name__}: {e}", cause=e
        ) from e


class MutatingWebhook:
    """Reviews admission requests by mutating the decoded object."""

    def __init__(
        self,
        resolver: ObjectResolver,
        mutator: MutatorLike,
        name: str = DEFAULT_DYNAMIC_WEBHOOK_NAME,
        logger: Logger | None = None,
        metrics: MetricsCollector | None = None,
        review_timeout: float | None = None,
    ):
        """
        Initialize the webhook.

        Args:
            resolver: Strategy decoding raw payloads into objects
            mutator: Mutator (or plain callable) applied to every object
            name: Webhook name used in logs and metrics
            logger: Logger for review events
            metrics: Metrics collector (defaults to one honoring settings)
            review_timeout: Deadline in seconds for reviews started without a
                context (defaults to settings; 0 disables)
        """
        self.resolver = resolver
        self.mutator = _as_chain(mutator)
        self.name = name
        self.log = ReviewLogger(name, logger)
        self.metrics = metrics or MetricsCollector(enabled=settings.metrics_enabled)
        if review_timeout is None:
            review_timeout = settings.review_timeout_seconds
        self.review_timeout = review_timeout or None

    @classmethod
    def static(
        cls,
        mutator: MutatorLike,
        shape: type[KubernetesObject],
        name: str = DEFAULT_STATIC_WEBHOOK_NAME,
        **kwargs,
    ) -> "MutatingWebhook":
        """
        Build a webhook bound to one object shape.

        Raises:
            ConfigurationError: If ``shape`` is not a KubernetesObject subclass
        """
        return cls(StaticResolver(shape), mutator, name=name, **kwargs)

    @classmethod
    def dynamic(
        cls,
        mutator: MutatorLike,
        catalog: TypeCatalog | None = None,
        name: str = DEFAULT_DYNAMIC_WEBHOOK_NAME,
        **kwargs,
    ) -> "MutatingWebhook":
        """Build a webhook resolving shapes from ``catalog`` per request."""
        if catalog is None:
            catalog = default_catalog()
        return cls(DynamicResolver(catalog), mutator, name=name, **kwargs)

    def review(
        self, request: AdmissionRequest, ctx: ReviewContext | None = None
    ) -> AdmissionResponse:
        """
        Review an admission request.

        Args:
            request: The admission request
            ctx: Cancellation/deadline context handed to the mutators

        Returns:
            The admission response; this method does not raise
        """
        if ctx is None:
            ctx = ReviewContext(uid=request.uid, timeout=self.review_timeout)

        start_time = time.perf_counter()
        with (
            correlation_scope(request.uid),
            self.metrics.track_review(self.name) as outcome,
        ):
            self.log.log_review_start(request.uid)
            try:
                response, kind = self._review(request, ctx)
            except WebhookError as e:
                outcome.denied(e)
                mutator = e.mutator if isinstance(e, MutationError) else None
                self.log.log_review_denied(
                    request.uid, e, time.perf_counter() - start_time, mutator=mutator
                )
                return AdmissionResponse.deny(request.uid, str(e))
            except Exception as e:
                outcome.denied(e)
                self.log.log_unexpected_error(request.uid, e)
                return AdmissionResponse.deny(request.uid, f"internal error: {e}")

            patched = response.patch is not None
            outcome.allowed(patched)
            self.log.log_review_allowed(
                request.uid, kind, patched, time.perf_counter() - start_time
            )
            return response

    def _review(
        self, request: AdmissionRequest, ctx: ReviewContext
    ) -> tuple[AdmissionResponse, str]:
        obj = self.resolver.decode(request.object)
        kind = obj.KIND or type(obj).__name__

        # The baseline is serialized before any mutator sees the object.
        baseline = _encode(obj)
        self.mutator.mutate(ctx, obj)
        mutated = _encode(obj)

        document = create_merge_patch(baseline, mutated)
        if not document:
            return AdmissionResponse.allow(request.uid), kind

        response = AdmissionResponse.with_patch(
            request.uid, encode_patch(document), PATCH_TYPE_JSON_PATCH
        )
        return response, kind

    def __repr__(self) -> str:
        return f"MutatingWebhook({self.name}, {self.resolver!r})"
