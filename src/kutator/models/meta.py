"""
Common object metadata shared by every object shape.

Every shape the webhook can decode into derives from KubernetesObject, which
guarantees the metadata accessors (name, namespace, annotations, labels) are
available regardless of the concrete kind. Mutators that only touch metadata
therefore need no knowledge of the kind they receive.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator


class TypeMeta(BaseModel):
    """API version and kind embedded in a serialized object."""

    model_config = {"populate_by_name": True, "extra": "ignore"}

    api_version: str | None = Field(None, alias="apiVersion")
    kind: str | None = None


class ObjectMeta(BaseModel):
    """Standard object metadata."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    name: str | None = None
    generate_name: str | None = Field(None, alias="generateName")
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = Field(None, alias="resourceVersion")
    generation: int | None = None
    creation_timestamp: str | None = Field(None, alias="creationTimestamp")
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    owner_references: list[dict[str, Any]] | None = Field(
        None, alias="ownerReferences"
    )
    finalizers: list[str] | None = None


class KubernetesObject(BaseModel):
    """
    Base class for every decodable object shape.

    Subclasses declare their identity through the API_VERSION and KIND class
    variables; the type catalog registers shapes by that pair.
    """

    API_VERSION: ClassVar[str] = ""
    KIND: ClassVar[str] = ""

    model_config = {"populate_by_name": True, "extra": "allow"}

    api_version: str | None = Field(None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @field_validator("metadata", mode="before")
    @classmethod
    def default_null_metadata(cls, v):
        if v is None:
            return ObjectMeta()
        return v

    @classmethod
    def type_key(cls) -> tuple[str, str]:
        """Return the (apiVersion, kind) pair identifying this shape."""
        return cls.API_VERSION, cls.KIND

    def get_name(self) -> str | None:
        return self.metadata.name

    def set_name(self, name: str | None) -> None:
        self.metadata.name = name

    def get_namespace(self) -> str | None:
        return self.metadata.namespace

    def set_namespace(self, namespace: str | None) -> None:
        self.metadata.namespace = namespace

    def get_annotations(self) -> dict[str, str] | None:
        return self.metadata.annotations

    def set_annotations(self, annotations: dict[str, str] | None) -> None:
        self.metadata.annotations = annotations

    def get_labels(self) -> dict[str, str] | None:
        return self.metadata.labels

    def set_labels(self, labels: dict[str, str] | None) -> None:
        self.metadata.labels = labels

    def to_json(self) -> bytes:
        """
        Serialize the object to its canonical JSON form.

        Unset optional fields are omitted.
        """
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()
