"""
Mutating admission webhook core.

The review pipeline is composed of:
- resolver: decodes raw payloads into object shapes (static or catalog based)
- mutator: ordered, short-circuiting mutator chains
- patch: merge-style structural diff between two serialized objects
- mutating: the review engine tying the above together
"""

from kutator.webhook.context import ReviewContext
from kutator.webhook.mutating import MutatingWebhook
from kutator.webhook.mutator import (
    AnnotationsMutator,
    LabelsMutator,
    Mutator,
    MutatorChain,
    MutatorFunc,
    narrow,
)
from kutator.webhook.resolver import (
    DynamicResolver,
    ObjectResolver,
    StaticResolver,
    TypeCatalog,
    default_catalog,
)

__all__ = [
    "AnnotationsMutator",
    "DynamicResolver",
    "LabelsMutator",
    "MutatingWebhook",
    "Mutator",
    "MutatorChain",
    "MutatorFunc",
    "ObjectResolver",
    "ReviewContext",
    "StaticResolver",
    "TypeCatalog",
    "default_catalog",
    "narrow",
]
