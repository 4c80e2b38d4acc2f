"""Node ownership arbitration between the legacy and native schedulers.

During the migration both schedulers run against the same node pool. The
scheduler selector taint on a node says which of them may place work there,
and a pod's scheduler selector toleration says which of them admitted it.
Every check here errs toward excluding a node from the legacy scheduler.
"""

from collections.abc import Iterable, Sequence, Set

from kube_bridge.config import BridgeConfig
from kube_bridge.constants import (
    TAINT_SCHEDULER,
    TAINT_SCHEDULER_VALUE_FENZO,
    TAINT_SCHEDULER_VALUE_KUBE,
)
from kube_bridge.farzone import is_farzone_node
from kube_bridge.logging_config import get_logger
from kube_bridge.models.node import Node
from kube_bridge.models.pod import Pod
from kube_bridge.normalize import equals_ignore_case, normalize

logger = get_logger(__name__)


def has_legacy_scheduler_taint(node: Node) -> bool:
    """Check whether the node's scheduler taint selects the legacy scheduler.

    A node without any scheduler taint counts as a legacy scheduler node. With
    several scheduler taints, their values must all agree on the legacy
    scheduler; disagreeing values are ambiguous and do not qualify.
    """
    values = {normalize(t.value) for t in node.taints if t.key == TAINT_SCHEDULER}
    if not values:
        return True
    return len(values) == 1 and TAINT_SCHEDULER_VALUE_FENZO in values


def is_node_owned_by_legacy_scheduler(
    farzones: Sequence[str], tolerated_taint_keys: Set[str], node: Node
) -> bool:
    """Decide whether the legacy scheduler may consider the node at all.

    Args:
        farzones: Configured farzone ids
        tolerated_taint_keys: Taint keys the legacy scheduler ignores
        node: Node snapshot

    Returns:
        True if the node is not a farzone node, its scheduler taint (if any)
        selects the legacy scheduler, and every other taint is tolerated
    """
    if is_farzone_node(farzones, node):
        logger.debug(f"Not owned by legacy scheduler (farzone node): {node.name}")
        return False

    if not has_legacy_scheduler_taint(node):
        logger.debug(f"Not owned by legacy scheduler (non legacy scheduler taint): {node.name}")
        return False

    if not node.taints:
        logger.debug(f"Owned by legacy scheduler (no taint set): {node.name}")
        return True

    for taint in node.taints:
        if taint.key != TAINT_SCHEDULER and taint.key not in tolerated_taint_keys:
            logger.debug(
                f"Not owned by legacy scheduler (non tolerable taint found): "
                f"nodeId={node.name}, taintKey={taint.key}"
            )
            return False

    logger.debug(f"Owned by legacy scheduler (all taints tolerated): {node.name}")
    return True


def filter_legacy_owned_nodes(config: BridgeConfig, nodes: Iterable[Node]) -> list[Node]:
    """Keep the nodes the legacy scheduler owns, in input order."""
    return [
        node
        for node in nodes
        if is_node_owned_by_legacy_scheduler(config.farzones, config.tolerated_taint_keys, node)
    ]


def is_owned_by_modern_scheduler(pod: Pod) -> bool:
    """Check whether the pod tolerates the native scheduler's selector taint.

    This looks only at the pod's own tolerations. It does not check the node
    the pod landed on.
    """
    for toleration in pod.tolerations:
        if toleration.key != TAINT_SCHEDULER:
            continue
        if equals_ignore_case(toleration.value, TAINT_SCHEDULER_VALUE_KUBE):
            return True
    return False
