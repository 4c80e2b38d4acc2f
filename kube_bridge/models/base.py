"""Common bases for immutable Kubernetes snapshot models."""

from abc import abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict


class Snapshot(BaseModel):
    """Frozen model built from a Kubernetes object snapshot."""

    model_config = ConfigDict(frozen=True)


class KubernetesObject(Snapshot):
    """Snapshot of a top-level API object (Node, Pod) that can be parsed on its own."""

    @classmethod
    @abstractmethod
    def from_manifest(cls, data: dict[str, Any]) -> "KubernetesObject":
        """Parse from a Kubernetes manifest dictionary."""

    @classmethod
    def from_kubernetes(cls, obj: Any) -> "KubernetesObject":
        """Parse from a kubernetes client model (V1Node, V1Pod, ...)."""
        from kubernetes.client import ApiClient

        # The client serializes its models back to camelCase manifest dictionaries
        return cls.from_manifest(ApiClient().sanitize_for_serialization(obj))


def section(data: dict[str, Any] | None, key: str) -> dict[str, Any]:
    """Return a nested manifest block, treating a missing or null block as empty."""
    if not data:
        return {}
    return data.get(key) or {}


def string_map(data: dict[str, Any] | None) -> dict[str, str]:
    """Coerce a label or annotation block into a string-to-string map."""
    if not data:
        return {}
    return {str(k): str(v) for k, v in data.items() if v is not None}
