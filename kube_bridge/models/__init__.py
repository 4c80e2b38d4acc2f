"""Snapshot models for nodes, pods, jobs and tasks."""

from kube_bridge.models.job import Job, JobDescriptor, Task
from kube_bridge.models.node import Node, NodeAddress, Taint
from kube_bridge.models.pod import (
    ContainerState,
    ContainerStatus,
    ExecutorNetworkDetails,
    Pod,
    RunningState,
    TerminatedState,
    Toleration,
    UnsetState,
    WaitingState,
)

__all__ = [
    "Node",
    "NodeAddress",
    "Taint",
    "Pod",
    "Toleration",
    "ContainerState",
    "ContainerStatus",
    "UnsetState",
    "WaitingState",
    "RunningState",
    "TerminatedState",
    "ExecutorNetworkDetails",
    "Job",
    "JobDescriptor",
    "Task",
]
