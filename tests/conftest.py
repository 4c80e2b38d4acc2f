"""Pytest configuration and shared fixtures."""

import pytest
from hypothesis import Verbosity, settings

from kube_bridge.constants import NODE_LABEL_ZONE, TAINT_SCHEDULER
from kube_bridge.models import Job, JobDescriptor, Node, Pod, Taint, Task

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=10, verbosity=Verbosity.verbose)

# Load the default profile
settings.load_profile("default")


def make_node(name="node-1", zone=None, taints=()):
    """Build a node snapshot from (key, value) taint pairs."""
    labels = {NODE_LABEL_ZONE: zone} if zone is not None else {}
    return Node(
        name=name,
        labels=labels,
        taints=tuple(Taint(key=k, value=v, effect="NoSchedule") for k, v in taints),
    )


def scheduler_taint(value):
    return (TAINT_SCHEDULER, value)


@pytest.fixture
def sample_node_manifest():
    """Node manifest as returned by kubectl get node -o yaml."""
    return {
        "apiVersion": "v1",
        "kind": "Node",
        "metadata": {
            "name": "ip-10-0-0-12",
            "labels": {
                "topology.kubernetes.io/zone": "us-east-1a",
                "kubernetes.io/hostname": "ip-10-0-0-12",
            },
        },
        "spec": {
            "taints": [
                {"key": TAINT_SCHEDULER, "value": "fenzo", "effect": "NoSchedule"},
                {"key": "node.kube-bridge.io/decommissioning", "value": "true", "effect": "NoExecute"},
            ]
        },
        "status": {
            "addresses": [
                {"type": "Hostname", "address": "ip-10-0-0-12"},
                {"type": "InternalIP", "address": "fd00::12"},
                {"type": "InternalIP", "address": "10.0.0.12"},
            ]
        },
    }


@pytest.fixture
def sample_pod_manifest():
    """Pod manifest of a task launched by the native scheduler."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": "task-0001",
            "namespace": "default",
            "annotations": {
                "IpAddress": "10.0.0.5",
                "EniId": "eni-0abc",
            },
        },
        "spec": {
            "nodeName": "ip-10-0-0-12",
            "tolerations": [
                {"key": TAINT_SCHEDULER, "operator": "Equal", "value": "kubeScheduler", "effect": "NoSchedule"}
            ],
        },
        "status": {
            "containerStatuses": [
                {"name": "main", "state": {"running": {"startedAt": "2024-03-01T10:00:00Z"}}}
            ]
        },
    }


@pytest.fixture
def sample_job():
    return Job(
        id="job-1",
        descriptor=JobDescriptor(
            application_name="recommendations",
            capacity_group="rec-prod",
            image="registry.example.com/rec:1.4.2",
            hard_constraints={"availabilityZone": "us-east-1a"},
            attributes={"runtimePredictionSec": "120"},
        ),
    )


@pytest.fixture
def sample_task():
    return Task(
        id="task-0001",
        job_id="job-1",
        task_context={"opportunisticCpuCount": "4", "opportunisticCpuAllocation": "alloc-77"},
    )


@pytest.fixture
def pod_with_annotations():
    def _make(annotations):
        return Pod(name="task-0001", annotations=annotations)

    return _make
