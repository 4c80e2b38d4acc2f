"""Data models for Kubernetes pod snapshots and the facts derived from them."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import Field

from kube_bridge.models.base import KubernetesObject, Snapshot, section, string_map


class Toleration(Snapshot):
    """Kubernetes pod toleration."""

    key: str | None = None
    operator: str | None = None
    value: str | None = None
    effect: str | None = None


class UnsetState(Snapshot):
    """Container state not reported yet."""

    state: Literal["unset"] = "unset"


class WaitingState(Snapshot):
    state: Literal["waiting"] = "waiting"
    reason: str | None = None
    message: str | None = None


class RunningState(Snapshot):
    state: Literal["running"] = "running"
    started_at: datetime | None = None


class TerminatedState(Snapshot):
    state: Literal["terminated"] = "terminated"
    started_at: datetime | None = None
    finished_at: datetime | None = None
    reason: str | None = None
    message: str | None = None
    exit_code: int | None = None


ContainerState = Annotated[
    UnsetState | WaitingState | RunningState | TerminatedState,
    Field(discriminator="state"),
]


def parse_container_state(data: dict[str, Any] | None) -> ContainerState:
    """Convert a V1ContainerState manifest block into its variant.

    Kubernetes sets at most one of waiting, running and terminated. If several
    are present the first one in that order wins.
    """
    if not data:
        return UnsetState()

    waiting = data.get("waiting")
    if waiting is not None:
        return WaitingState(reason=waiting.get("reason"), message=waiting.get("message"))

    running = data.get("running")
    if running is not None:
        return RunningState(started_at=running.get("startedAt"))

    terminated = data.get("terminated")
    if terminated is not None:
        return TerminatedState(
            started_at=terminated.get("startedAt"),
            finished_at=terminated.get("finishedAt"),
            reason=terminated.get("reason"),
            message=terminated.get("message"),
            exit_code=terminated.get("exitCode"),
        )

    return UnsetState()


class ContainerStatus(Snapshot):
    """Status of one container in a pod."""

    name: str = ""
    state: ContainerState = Field(default_factory=UnsetState)


class Pod(KubernetesObject):
    """Pod snapshot handed in by the cluster watch."""

    name: str
    namespace: str = "default"
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    tolerations: tuple[Toleration, ...] = ()
    node_name: str | None = None
    # None when the pod has no status.containerStatuses at all
    container_statuses: tuple[ContainerStatus, ...] | None = None

    @classmethod
    def from_manifest(cls, data: dict[str, Any]) -> "Pod":
        """Parse from a Kubernetes Pod manifest dictionary."""
        metadata = section(data, "metadata")
        spec = section(data, "spec")
        status = section(data, "status")

        tolerations = [
            Toleration(
                key=t.get("key"),
                operator=t.get("operator"),
                value=t.get("value"),
                effect=t.get("effect"),
            )
            for t in spec.get("tolerations") or []
        ]

        container_statuses = None
        if status.get("containerStatuses") is not None:
            container_statuses = tuple(
                ContainerStatus(
                    name=cs.get("name") or "", state=parse_container_state(cs.get("state"))
                )
                for cs in status["containerStatuses"]
            )

        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "default",
            labels=string_map(metadata.get("labels")),
            annotations=string_map(metadata.get("annotations")),
            tolerations=tuple(tolerations),
            node_name=spec.get("nodeName"),
            container_statuses=container_statuses,
        )


class ExecutorNetworkDetails(Snapshot):
    """Network facts the executor agent publishes through pod annotations."""

    is_routable_ip: bool
    ip_address: str
    ipv6_address: str | None = None
    eni_ip_address: str
    eni_id: str
    resource_id: str
