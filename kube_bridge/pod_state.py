"""Normalized lifecycle and network facts projected from pod and node snapshots."""

from ipaddress import AddressValueError, IPv4Address

from kube_bridge.annotations import LaunchAnnotations, decode_annotations
from kube_bridge.constants import (
    ANNOTATION_ENI_ID,
    ANNOTATION_ENI_IP_ADDRESS,
    ANNOTATION_ENI_IPV6_ADDRESS,
    ANNOTATION_IP_ADDRESS,
    ANNOTATION_IS_ROUTABLE_IP,
    ANNOTATION_RESOURCE_ID,
    TYPE_INTERNAL_IP,
    UNKNOWN_ENI_ID,
    UNKNOWN_ENI_IP_ADDRESS,
    UNKNOWN_IP_ADDRESS,
    UNKNOWN_RESOURCE_ID,
)
from kube_bridge.models.node import Node
from kube_bridge.models.pod import (
    ContainerState,
    ExecutorNetworkDetails,
    Pod,
    RunningState,
    TerminatedState,
    UnsetState,
    WaitingState,
)
from kube_bridge.normalize import equals_ignore_case, normalize


def find_container_state(pod: Pod) -> ContainerState | None:
    """Return the state of the first container that reports one.

    Containers whose state is not set yet are skipped.
    """
    for status in pod.container_statuses or ():
        if not isinstance(status.state, UnsetState):
            return status.state
    return None


def find_terminated_state(pod: Pod) -> TerminatedState | None:
    state = find_container_state(pod)
    if isinstance(state, TerminatedState):
        return state
    return None


def format_state(state: ContainerState) -> str:
    """Render a container state for log and diagnostic output."""
    if isinstance(state, WaitingState):
        return f"{{state=waiting, reason={state.reason}, message={state.message}}}"
    if isinstance(state, RunningState):
        return f"{{state=running, startedAt={state.started_at}}}"
    if isinstance(state, TerminatedState):
        return (
            f"{{state=terminated, startedAt={state.started_at}, finishedAt={state.finished_at}, "
            f"reason={state.reason}, message={state.message}}}"
        )
    return "{state=<not set>}"


def _parse_routable(value: str | None) -> bool:
    # Anything but an explicit "false" keeps the default
    return normalize(value) != "false"


def get_executor_network_details(pod: Pod) -> ExecutorNetworkDetails | None:
    """Read the executor's network facts from the pod annotations.

    Returns:
        The details, or None if the executor has not published an IP address yet
    """
    annotations = pod.annotations
    ip_address = annotations.get(ANNOTATION_IP_ADDRESS)
    if not ip_address:
        return None

    return ExecutorNetworkDetails(
        is_routable_ip=_parse_routable(annotations.get(ANNOTATION_IS_ROUTABLE_IP)),
        ip_address=ip_address,
        ipv6_address=annotations.get(ANNOTATION_ENI_IPV6_ADDRESS),
        eni_ip_address=annotations.get(ANNOTATION_ENI_IP_ADDRESS, UNKNOWN_ENI_IP_ADDRESS),
        eni_id=annotations.get(ANNOTATION_ENI_ID, UNKNOWN_ENI_ID),
        resource_id=annotations.get(ANNOTATION_RESOURCE_ID, UNKNOWN_RESOURCE_ID),
    )


def _is_ipv4(address: str) -> bool:
    try:
        IPv4Address(address)
    except AddressValueError:
        return False
    return True


def get_node_ipv4_address(node: Node) -> str:
    """Return the node's first internal IPv4 address, or a sentinel."""
    for address in node.addresses:
        if equals_ignore_case(address.type, TYPE_INTERNAL_IP) and _is_ipv4(address.address):
            return address.address
    return UNKNOWN_IP_ADDRESS


def read_launch_facts(pod: Pod) -> LaunchAnnotations:
    """Decode the annotations written onto the pod when its task was launched."""
    return decode_annotations(pod.annotations)
