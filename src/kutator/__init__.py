"""
Kutator - decision core for Kubernetes mutating admission webhooks.

Given an admission request carrying a serialized resource object, kutator:
- Decodes the object into a typed shape (static or catalog-resolved)
- Runs an ordered, short-circuiting chain of mutators against it
- Computes a merge-style change document between original and mutated forms
- Builds a well-formed admission response for every outcome
"""

from kutator.models.admission import AdmissionRequest, AdmissionResponse
from kutator.webhook.mutating import MutatingWebhook

__version__ = "0.1.0"

__all__ = [
    "AdmissionRequest",
    "AdmissionResponse",
    "MutatingWebhook",
]
