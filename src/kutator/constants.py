"""
Constants used throughout kutator.

This module defines:
- Admission protocol values (patch type, denial status code)
- Error categories used by the error hierarchy
- Review result labels used by logging and metrics
"""

# Patch type advertised on every response that carries a change document.
# The document body is a merge-style diff; callers expect this exact tag.
PATCH_TYPE_JSON_PATCH = "JSONPatch"

# HTTP-like status code reported for denied reviews
DENIED_STATUS_CODE = 403

# Error categories
CATEGORY_DECODE = "decode"
CATEGORY_MUTATION = "mutation"
CATEGORY_ENCODE = "encode"
CATEGORY_CONFIGURATION = "configuration"
CATEGORY_INTERNAL = "internal"

# Review results (metric and log labels)
RESULT_ALLOWED = "allowed"
RESULT_PATCHED = "patched"
RESULT_DENIED = "denied"

# Default webhook names
DEFAULT_STATIC_WEBHOOK_NAME = "static-mutating-webhook"
DEFAULT_DYNAMIC_WEBHOOK_NAME = "dynamic-mutating-webhook"
