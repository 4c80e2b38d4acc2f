"""Data models for Kubernetes node snapshots."""

from typing import Any

from pydantic import Field, field_validator

from kube_bridge.constants import NODE_LABEL_ZONE, NODE_LABEL_ZONE_LEGACY
from kube_bridge.models.base import KubernetesObject, Snapshot, section, string_map
from kube_bridge.normalize import normalize


class Taint(Snapshot):
    """Kubernetes node taint."""

    key: str
    value: str | None = None
    effect: str | None = None  # NoSchedule, PreferNoSchedule, NoExecute

    @field_validator("effect")
    @classmethod
    def validate_effect(cls, v: str | None) -> str | None:
        """Validate taint effect is one of the allowed values."""
        allowed = ["NoSchedule", "PreferNoSchedule", "NoExecute"]
        if v is not None and v not in allowed:
            raise ValueError(f"effect must be one of {allowed}, got {v}")
        return v

    def __str__(self) -> str:
        value = f"={self.value}" if self.value is not None else ""
        effect = f":{self.effect}" if self.effect else ""
        return f"{self.key}{value}{effect}"


class NodeAddress(Snapshot):
    """One entry of a node's status.addresses list."""

    type: str
    address: str


class Node(KubernetesObject):
    """Node snapshot as seen by both schedulers."""

    name: str
    labels: dict[str, str] = Field(default_factory=dict)
    taints: tuple[Taint, ...] = ()
    addresses: tuple[NodeAddress, ...] = ()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate node name is not empty."""
        if not v:
            raise ValueError("node name cannot be empty")
        return v

    @property
    def zone(self) -> str | None:
        """Zone label of the node, or None if the node has none.

        The topology label wins over the deprecated failure-domain label unless it is blank.
        """
        for key in (NODE_LABEL_ZONE, NODE_LABEL_ZONE_LEGACY):
            zone = self.labels.get(key)
            if normalize(zone):
                return zone
        return None

    @classmethod
    def from_manifest(cls, data: dict[str, Any]) -> "Node":
        """Parse from a Kubernetes Node manifest dictionary."""
        metadata = section(data, "metadata")
        spec = section(data, "spec")
        status = section(data, "status")

        taints = [
            Taint(key=t.get("key") or "", value=t.get("value"), effect=t.get("effect"))
            for t in spec.get("taints") or []
        ]
        addresses = [
            NodeAddress(type=a.get("type") or "", address=a.get("address") or "")
            for a in status.get("addresses") or []
        ]

        return cls(
            name=metadata.get("name", ""),
            labels=string_map(metadata.get("labels")),
            taints=tuple(taints),
            addresses=tuple(addresses),
        )
