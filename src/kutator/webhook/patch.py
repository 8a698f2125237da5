"""
Merge-style structural diff between two serialized objects.

The change document mirrors the nesting of the compared objects:

- keys added or changed carry their new value,
- keys removed carry None (null), so removal is distinguishable from
  "unchanged",
- unchanged keys are omitted at every level,
- nested objects are diffed recursively; every other value kind (scalars,
  lists, mixed kinds) is compared atomically and replaced wholesale.

Lists are never diffed element-wise. Callers apply the document as a merge
against the original object, so any change inside a list replaces the whole
list.
"""

import json
from collections.abc import Mapping
from typing import Any

from kutator.errors import EncodeError

JSONDocument = bytes | str | Mapping[str, Any]


def _load(document: JSONDocument, label: str) -> Mapping[str, Any]:
    if isinstance(document, Mapping):
        return document
    try:
        loaded = json.loads(document)
    except ValueError as e:
        raise EncodeError(f"{label} document is not valid JSON: {e}", cause=e) from e
    if not isinstance(loaded, dict):
        raise EncodeError(
            f"{label} document must be a JSON object, got {type(loaded).__name__}"
        )
    return loaded


def _diff(original: Mapping[str, Any], modified: Mapping[str, Any]) -> dict[str, Any]:
    patch: dict[str, Any] = {}

    for key, new_value in modified.items():
        if key not in original:
            patch[key] = new_value
            continue

        old_value = original[key]
        if isinstance(old_value, Mapping) and isinstance(new_value, Mapping):
            nested = _diff(old_value, new_value)
            if nested:
                patch[key] = nested
        elif not _equal(old_value, new_value):
            patch[key] = new_value

    for key in original:
        if key not in modified:
            patch[key] = None

    return patch


def _equal(a: Any, b: Any) -> bool:
    """JSON value equality that does not confuse booleans with numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, int | float) and isinstance(b, int | float):
        return a == b
    return type(a) is type(b) and a == b


def create_merge_patch(original: JSONDocument, modified: JSONDocument) -> dict[str, Any]:
    """
    Compute the change document turning ``original`` into ``modified``.

    Args:
        original: Baseline object, as JSON bytes/str or a decoded mapping
        modified: Changed object, as JSON bytes/str or a decoded mapping

    Returns:
        The change document; an empty dict when nothing changed

    Raises:
        EncodeError: If either document is not a JSON object
    """
    return _diff(_load(original, "original"), _load(modified, "modified"))


def encode_patch(document: Mapping[str, Any]) -> bytes:
    """Serialize a change document as compact JSON with sorted keys."""
    try:
        return json.dumps(
            document, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        ).encode()
    except (TypeError, ValueError) as e:
        raise EncodeError(f"could not encode patch: {e}", cause=e) from e
