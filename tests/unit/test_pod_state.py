"""Unit tests for pod state projection."""

import base64
from datetime import datetime, timezone

from kube_bridge.annotations import build_annotations
from kube_bridge.models import (
    ContainerStatus,
    Node,
    NodeAddress,
    Pod,
    RunningState,
    TerminatedState,
    UnsetState,
    WaitingState,
)
from kube_bridge.pod_state import (
    find_container_state,
    find_terminated_state,
    format_state,
    get_executor_network_details,
    get_node_ipv4_address,
    read_launch_facts,
)

STARTED = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
FINISHED = datetime(2024, 3, 1, 10, 5, tzinfo=timezone.utc)


def pod_with_states(*states):
    statuses = tuple(ContainerStatus(name=f"c{i}", state=s) for i, s in enumerate(states))
    return Pod(name="task-1", container_statuses=statuses)


def test_find_container_state_skips_unset_entries():
    oom = TerminatedState(reason="OOMKilled", exit_code=137)
    pod = pod_with_states(UnsetState(), oom)

    assert find_container_state(pod) == oom
    assert find_terminated_state(pod) == oom


def test_find_container_state_returns_first_defined():
    pod = pod_with_states(WaitingState(reason="ContainerCreating"), RunningState(started_at=STARTED))
    assert isinstance(find_container_state(pod), WaitingState)
    assert find_terminated_state(pod) is None


def test_find_container_state_without_statuses():
    assert find_container_state(Pod(name="task-1")) is None
    assert find_container_state(pod_with_states()) is None
    assert find_container_state(pod_with_states(UnsetState(), UnsetState())) is None


def test_find_terminated_state_of_running_pod():
    assert find_terminated_state(pod_with_states(RunningState(started_at=STARTED))) is None


def test_format_waiting_state():
    state = WaitingState(reason="ImagePullBackOff", message="Back-off pulling image")
    assert format_state(state) == "{state=waiting, reason=ImagePullBackOff, message=Back-off pulling image}"


def test_format_running_state():
    assert format_state(RunningState(started_at=STARTED)) == f"{{state=running, startedAt={STARTED}}}"


def test_format_terminated_state():
    state = TerminatedState(started_at=STARTED, finished_at=FINISHED, reason="Completed", message="done")
    assert format_state(state) == (
        f"{{state=terminated, startedAt={STARTED}, finishedAt={FINISHED}, "
        "reason=Completed, message=done}"
    )


def test_format_unset_state():
    assert format_state(UnsetState()) == "{state=<not set>}"


def test_network_details_with_only_ip(pod_with_annotations):
    details = get_executor_network_details(pod_with_annotations({"IpAddress": "10.0.0.5"}))

    assert details is not None
    assert details.ip_address == "10.0.0.5"
    assert details.is_routable_ip is True
    assert details.ipv6_address is None
    assert details.eni_ip_address == "UnknownEniIpAddress"
    assert details.eni_id == "UnknownEniId"
    assert details.resource_id == "UnknownResourceId"


def test_network_details_with_all_annotations(pod_with_annotations):
    pod = pod_with_annotations(
        {
            "IpAddress": "10.0.0.5",
            "IsRoutableIp": "FALSE",
            "EniIPv6Address": "2600:1f18::5",
            "EniIpAddress": "10.0.0.6",
            "EniId": "eni-0abc",
            "ResourceId": "resource-eni-3",
        }
    )
    details = get_executor_network_details(pod)

    assert details.is_routable_ip is False
    assert details.ipv6_address == "2600:1f18::5"
    assert details.eni_ip_address == "10.0.0.6"
    assert details.eni_id == "eni-0abc"
    assert details.resource_id == "resource-eni-3"


def test_unparseable_routable_flag_defaults_to_true(pod_with_annotations):
    details = get_executor_network_details(
        pod_with_annotations({"IpAddress": "10.0.0.5", "IsRoutableIp": "maybe"})
    )
    assert details.is_routable_ip is True


def test_network_details_absent_without_ip(pod_with_annotations):
    assert get_executor_network_details(pod_with_annotations({})) is None
    assert get_executor_network_details(pod_with_annotations({"IpAddress": ""})) is None
    assert get_executor_network_details(pod_with_annotations({"EniId": "eni-0abc"})) is None


def test_node_ipv4_address_skips_ipv6_and_other_types():
    node = Node(
        name="node-1",
        addresses=(
            NodeAddress(type="ExternalIP", address="54.1.2.3"),
            NodeAddress(type="InternalIP", address="fd00::12"),
            NodeAddress(type="internalip", address="10.0.0.12"),
            NodeAddress(type="InternalIP", address="10.0.0.13"),
        ),
    )
    assert get_node_ipv4_address(node) == "10.0.0.12"


def test_node_ipv4_address_sentinel():
    assert get_node_ipv4_address(Node(name="node-1")) == "UnknownIpAddress"
    node = Node(name="node-1", addresses=(NodeAddress(type="InternalIP", address="not-an-ip"),))
    assert get_node_ipv4_address(node) == "UnknownIpAddress"


def test_read_launch_facts(sample_job, sample_task, pod_with_annotations):
    annotations = build_annotations(sample_job, sample_task, b"container-info", {}, True)
    facts = read_launch_facts(pod_with_annotations(annotations))

    assert facts.container_info == b"container-info"
    assert facts.runtime_prediction_sec == "120"
    assert facts.opportunistic_cpu_count == "4"
    assert facts.opportunistic_allocation_id == "alloc-77"
    assert facts.job_descriptor == sample_job.descriptor


def test_read_launch_facts_with_corrupt_job_descriptor(sample_job, sample_task, pod_with_annotations):
    annotations = build_annotations(sample_job, sample_task, b"container-info", {}, True)
    raw = bytearray(base64.b64decode(annotations["jobDescriptor"]))
    raw[10] = 0xFF
    annotations["jobDescriptor"] = base64.b64encode(bytes(raw)).decode()

    facts = read_launch_facts(pod_with_annotations(annotations))

    assert facts.job_descriptor is None
    assert facts.container_info == b"container-info"
    assert facts.runtime_prediction_sec == "120"
