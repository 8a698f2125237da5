"""
Pydantic models for the built-in object shapes.

This module defines the closed set of concrete kinds that mutators may
narrow a decoded object to. Only the fields mutators commonly touch are
modelled explicitly; anything else in the payload is preserved as extra
data so it survives a decode/encode cycle.
"""

from typing import Any

from pydantic import BaseModel, Field

from kutator.models.meta import KubernetesObject, ObjectMeta


class ResourceRequirements(BaseModel):
    """Compute resource requests and limits of a container."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    requests: dict[str, str] | None = None
    limits: dict[str, str] | None = None


class Container(BaseModel):
    """A single container of a pod."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    name: str | None = None
    image: str | None = None
    command: list[str] | None = None
    args: list[str] | None = None
    env: list[dict[str, Any]] | None = None
    ports: list[dict[str, Any]] | None = None
    resources: ResourceRequirements | None = None
    image_pull_policy: str | None = Field(None, alias="imagePullPolicy")
    security_context: dict[str, Any] | None = Field(None, alias="securityContext")


class PodSpec(BaseModel):
    """Pod specification."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    containers: list[Container] = Field(default_factory=list)
    init_containers: list[Container] | None = Field(None, alias="initContainers")
    node_selector: dict[str, str] | None = Field(None, alias="nodeSelector")
    service_account_name: str | None = Field(None, alias="serviceAccountName")
    restart_policy: str | None = Field(None, alias="restartPolicy")
    volumes: list[dict[str, Any]] | None = None
    tolerations: list[dict[str, Any]] | None = None


class Pod(KubernetesObject):
    """core/v1 Pod."""

    API_VERSION = "v1"
    KIND = "Pod"

    spec: PodSpec = Field(default_factory=PodSpec)
    status: dict[str, Any] | None = None


class ConfigMap(KubernetesObject):
    """core/v1 ConfigMap."""

    API_VERSION = "v1"
    KIND = "ConfigMap"

    data: dict[str, str] | None = None
    binary_data: dict[str, str] | None = Field(None, alias="binaryData")
    immutable: bool | None = None


class Secret(KubernetesObject):
    """core/v1 Secret."""

    API_VERSION = "v1"
    KIND = "Secret"

    type: str | None = None
    data: dict[str, str] | None = None
    string_data: dict[str, str] | None = Field(None, alias="stringData")
    immutable: bool | None = None


class ServiceSpec(BaseModel):
    """Service specification."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    type: str | None = None
    selector: dict[str, str] | None = None
    ports: list[dict[str, Any]] | None = None
    cluster_ip: str | None = Field(None, alias="clusterIP")


class Service(KubernetesObject):
    """core/v1 Service."""

    API_VERSION = "v1"
    KIND = "Service"

    spec: ServiceSpec = Field(default_factory=ServiceSpec)
    status: dict[str, Any] | None = None


class PodTemplateSpec(BaseModel):
    """Pod template embedded in workload controllers."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    metadata: ObjectMeta | None = None
    spec: PodSpec | None = None


class DeploymentSpec(BaseModel):
    """Deployment specification."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    replicas: int | None = None
    selector: dict[str, Any] | None = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)
    strategy: dict[str, Any] | None = None


class Deployment(KubernetesObject):
    """apps/v1 Deployment."""

    API_VERSION = "apps/v1"
    KIND = "Deployment"

    spec: DeploymentSpec = Field(default_factory=DeploymentSpec)
    status: dict[str, Any] | None = None


BUILTIN_SHAPES: tuple[type[KubernetesObject], ...] = (
    Pod,
    ConfigMap,
    Secret,
    Service,
    Deployment,
)
