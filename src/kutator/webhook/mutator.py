"""
Mutators and mutator chains.

A mutator receives the review context and the decoded object, changes the
object in place and returns whether the chain should stop. Failures are
raised as exceptions; a raised exception aborts the whole review.

Mutators may be invoked concurrently by independent reviews, so any state
they close over must be immutable or synchronized by the mutator itself.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Protocol, TypeVar

from kutator.errors import MutationError
from kutator.models.meta import KubernetesObject
from kutator.webhook.context import ReviewContext

logger = logging.getLogger(__name__)

ObjectT = TypeVar("ObjectT", bound=KubernetesObject)


class Mutator(Protocol):
    """Single mutation step."""

    def mutate(self, ctx: ReviewContext, obj: KubernetesObject) -> bool:
        """
        Mutate ``obj`` in place.

        Returns:
            True to stop the chain after this mutator (not an error)

        Raises:
            MutationError: If the object cannot be mutated
        """
        ...


def mutator_name(mutator: Mutator) -> str:
    return getattr(mutator, "name", None) or type(mutator).__name__


def narrow(obj: KubernetesObject, shape: type[ObjectT]) -> ObjectT:
    """
    Narrow a decoded object to a concrete shape.

    Raises:
        MutationError: If the object is not an instance of ``shape``
    """
    if not isinstance(obj, shape):
        actual = obj.KIND or type(obj).__name__
        raise MutationError(f"expected {shape.KIND or shape.__name__}, got {actual}")
    return obj


class MutatorFunc:
    """Adapts a plain callable ``fn(ctx, obj) -> bool`` to the Mutator protocol."""

    def __init__(
        self,
        fn: Callable[[ReviewContext, KubernetesObject], bool],
        name: str | None = None,
    ):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", type(fn).__name__)

    def mutate(self, ctx: ReviewContext, obj: KubernetesObject) -> bool:
        return bool(self.fn(ctx, obj))

    def __repr__(self) -> str:
        return f"MutatorFunc({self.name})"


class MutatorChain:
    """
    Runs mutators strictly in order against the same object.

    - A mutator returning True stops the chain; earlier changes are kept.
    - A mutator raising aborts the chain; nothing after it runs.
    - The context is checked for cancellation before each mutator.

    The chain is a Mutator itself, so chains can be nested. The mutator
    list is fixed at construction.
    """

    def __init__(self, *mutators: Mutator, name: str | None = None):
        self.mutators: tuple[Mutator, ...] = mutators
        self.name = name or "chain"

    def mutate(self, ctx: ReviewContext, obj: KubernetesObject) -> bool:
        for mutator in self.mutators:
            name = mutator_name(mutator)
            ctx.raise_if_cancelled()
            try:
                stop = mutator.mutate(ctx, obj)
            except MutationError as e:
                if e.mutator is None:
                    e.mutator = name
                raise
            except Exception as e:
                raise MutationError(str(e), mutator=name, cause=e) from e

            if stop:
                logger.debug(f"Mutator {name} stopped chain {self.name}")
                return True
        return False

    def __len__(self) -> int:
        return len(self.mutators)

    def __repr__(self) -> str:
        names = ", ".join(mutator_name(m) for m in self.mutators)
        return f"MutatorChain({self.name}: {names})"


class AnnotationsMutator:
    """Merges fixed annotations into any object's metadata."""

    def __init__(self, annotations: Mapping[str, str], overwrite: bool = True):
        self.annotations = dict(annotations)
        self.overwrite = overwrite
        self.name = "annotations"

    def mutate(self, ctx: ReviewContext, obj: KubernetesObject) -> bool:
        current = dict(obj.get_annotations() or {})
        obj.set_annotations(_merge(current, self.annotations, self.overwrite))
        return False


class LabelsMutator:
    """Merges fixed labels into any object's metadata."""

    def __init__(self, labels: Mapping[str, str], overwrite: bool = True):
        self.labels = dict(labels)
        self.overwrite = overwrite
        self.name = "labels"

    def mutate(self, ctx: ReviewContext, obj: KubernetesObject) -> bool:
        current = dict(obj.get_labels() or {})
        obj.set_labels(_merge(current, self.labels, self.overwrite))
        return False


def _merge(
    current: dict[str, str], extra: Mapping[str, str], overwrite: bool
) -> dict[str, str]:
    for key, value in extra.items():
        if overwrite or key not in current:
            current[key] = value
    return current
