"""
Admission request and response models.

These are the values exchanged with the external server layer once it has
unwrapped the AdmissionReview envelope: the request carries the raw object
payload, the response carries the decision and the optional change document.
"""

import base64
import json
from typing import Any

from pydantic import BaseModel, Field

from kutator.constants import DENIED_STATUS_CODE


class AdmissionRequest(BaseModel):
    """An inbound admission request."""

    model_config = {"frozen": True}

    uid: str = Field(..., description="Request identifier, echoed in the response")
    object: bytes = Field(..., description="Raw serialized object payload")


class AdmissionResponse(BaseModel):
    """
    Outbound admission decision.

    ``reason`` is only populated on denial; ``patch`` and ``patch_type`` are
    only populated when an allowed review changed the object.
    """

    uid: str
    allowed: bool
    reason: str | None = None
    patch: bytes | None = None
    patch_type: str | None = None

    @classmethod
    def allow(cls, uid: str) -> "AdmissionResponse":
        return cls(uid=uid, allowed=True)

    @classmethod
    def deny(cls, uid: str, reason: str) -> "AdmissionResponse":
        return cls(uid=uid, allowed=False, reason=reason)

    @classmethod
    def with_patch(
        cls, uid: str, patch: bytes, patch_type: str
    ) -> "AdmissionResponse":
        return cls(uid=uid, allowed=True, patch=patch, patch_type=patch_type)

    def patch_document(self) -> dict[str, Any] | None:
        """Return the decoded change document, or None when nothing changed."""
        if self.patch is None:
            return None
        return json.loads(self.patch)

    def to_dict(self) -> dict[str, Any]:
        """
        Render the response the way it appears inside an AdmissionReview.

        Returns:
            Dict with camelCase keys; the patch is base64 encoded and the
            denial reason is carried as ``status.message``.
        """
        body: dict[str, Any] = {"uid": self.uid, "allowed": self.allowed}
        if self.reason is not None:
            body["status"] = {"message": self.reason, "code": DENIED_STATUS_CODE}
        if self.patch is not None:
            body["patch"] = base64.b64encode(self.patch).decode()
            body["patchType"] = self.patch_type
        return body
