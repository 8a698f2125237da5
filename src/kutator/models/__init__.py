"""
Models package - Pydantic models for type-safe object handling.

Defines data models for:
- Kubernetes object metadata and the shared metadata accessors
- Concrete object shapes (Pod, ConfigMap, Secret, Service, Deployment)
- Admission requests and responses
"""
