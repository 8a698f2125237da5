"""
Object resolution: from raw admission payload bytes to a typed object.

Two strategies are provided, chosen when the webhook is built:

- StaticResolver is bound to one shape and decodes every payload into it.
- DynamicResolver reads the payload's embedded apiVersion/kind first and
  looks the shape up in a TypeCatalog before decoding.

Both are pure functions of their input; the catalog is read-only once built
and can be shared by concurrent reviews.
"""

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Protocol

from pydantic import ValidationError

from kutator.errors import ConfigurationError, DecodeError
from kutator.models.core import BUILTIN_SHAPES
from kutator.models.meta import KubernetesObject, TypeMeta

logger = logging.getLogger(__name__)


def _first_error(error: ValidationError) -> str:
    """Summarize a pydantic validation error as 'loc: msg'."""
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


class ObjectResolver(Protocol):
    """Decodes raw payload bytes into a KubernetesObject."""

    def decode(self, raw: bytes) -> KubernetesObject: ...


class TypeCatalog:
    """
    Read-only lookup from (apiVersion, kind) to an object shape.

    The catalog is populated once at construction and never changes
    afterwards.
    """

    def __init__(self, shapes: Iterable[type[KubernetesObject]] = ()):
        """
        Build the catalog.

        Args:
            shapes: KubernetesObject subclasses to register

        Raises:
            ConfigurationError: If a shape is not a KubernetesObject subclass,
                has no identity, or its identity is registered twice
        """
        entries: dict[tuple[str, str], type[KubernetesObject]] = {}
        for shape in shapes:
            if not (isinstance(shape, type) and issubclass(shape, KubernetesObject)):
                raise ConfigurationError(
                    f"{shape!r} is not a KubernetesObject subclass", field="shapes"
                )
            key = shape.type_key()
            if not all(key):
                raise ConfigurationError(
                    f"{shape.__name__} does not declare API_VERSION and KIND",
                    field="shapes",
                )
            if key in entries:
                raise ConfigurationError(
                    f"{key[0]}/{key[1]} is already registered by "
                    f"{entries[key].__name__}",
                    field="shapes",
                )
            entries[key] = shape
        self._entries = MappingProxyType(entries)

    def lookup(self, api_version: str, kind: str) -> type[KubernetesObject] | None:
        return self._entries.get((api_version, kind))

    def kinds(self) -> list[tuple[str, str]]:
        return sorted(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TypeCatalog({len(self)} kinds)"


def default_catalog() -> TypeCatalog:
    """Return a catalog containing every built-in shape."""
    return TypeCatalog(BUILTIN_SHAPES)


class StaticResolver:
    """Decodes every payload into one fixed shape, skipping type lookup."""

    def __init__(self, shape: type[KubernetesObject]):
        if not (isinstance(shape, type) and issubclass(shape, KubernetesObject)):
            raise ConfigurationError(
                f"{shape!r} is not a KubernetesObject subclass", field="shape"
            )
        self.shape = shape

    def decode(self, raw: bytes) -> KubernetesObject:
        try:
            return self.shape.model_validate_json(raw)
        except ValidationError as e:
            raise DecodeError(
                f"could not decode object as {self.shape.__name__}: "
                f"{_first_error(e)}",
                cause=e,
            ) from e

    def __repr__(self) -> str:
        return f"StaticResolver({self.shape.__name__})"


class DynamicResolver:
    """Resolves the payload's shape from its embedded type metadata."""

    def __init__(self, catalog: TypeCatalog):
        self.catalog = catalog

    def resolve(self, raw: bytes) -> type[KubernetesObject]:
        """
        Determine the shape of a payload from its apiVersion and kind.

        Args:
            raw: Serialized object payload

        Returns:
            The registered shape for the payload's type metadata

        Raises:
            DecodeError: If the type metadata is missing, malformed or unknown
        """
        try:
            type_meta = TypeMeta.model_validate_json(raw)
        except ValidationError as e:
            raise DecodeError(
                f"could not read object type metadata: {_first_error(e)}", cause=e
            ) from e

        if not type_meta.api_version or not type_meta.kind:
            raise DecodeError("object has no apiVersion or kind")

        shape = self.catalog.lookup(type_meta.api_version, type_meta.kind)
        if shape is None:
            raise DecodeError(
                f"no kind {type_meta.kind!r} is registered for version "
                f"{type_meta.api_version!r}"
            )
        logger.debug(
            f"Resolved {type_meta.api_version}/{type_meta.kind} to {shape.__name__}"
        )
        return shape

    def decode(self, raw: bytes) -> KubernetesObject:
        shape = self.resolve(raw)
        try:
            return shape.model_validate_json(raw)
        except ValidationError as e:
            raise DecodeError(
                f"could not decode object as {shape.__name__}: {_first_error(e)}",
                cause=e,
            ) from e

    def __repr__(self) -> str:
        return f"DynamicResolver({self.catalog!r})"
