"""Farzone membership of nodes and jobs.

A farzone is a zone carved out for the native Kubernetes scheduler only. The
legacy scheduler never places work on a farzone node, and a job constrained to
a farzone is handed to the native scheduler.
"""

from collections.abc import Sequence

from kube_bridge.constants import JOB_CONSTRAINT_AVAILABILITY_ZONE
from kube_bridge.logging_config import get_logger
from kube_bridge.models.job import Job
from kube_bridge.models.node import Node
from kube_bridge.normalize import normalize

logger = get_logger(__name__)


def _match_farzone(farzones: Sequence[str], zone: str | None) -> str | None:
    """Return the configured farzone equal to zone, ignoring case."""
    wanted = normalize(zone)
    if not wanted:
        return None
    for farzone in farzones:
        if normalize(farzone) == wanted:
            return farzone
    return None


def is_farzone_node(farzones: Sequence[str], node: Node) -> bool:
    """Check whether the node's zone label names one of the farzones.

    Args:
        farzones: Configured farzone ids
        node: Node snapshot

    Returns:
        True if the node has a non-empty zone label matching a farzone
    """
    if not farzones:
        return False

    zone = node.zone
    if not normalize(zone):
        logger.debug(f"Node without zone label: {node.name}")
        return False

    if _match_farzone(farzones, zone) is not None:
        logger.debug(f"Farzone node: nodeId={node.name}, zoneId={zone}")
        return True

    logger.debug(f"Non-farzone node: nodeId={node.name}, zoneId={zone}")
    return False


def find_farzone_id(farzones: Sequence[str], job: Job) -> str | None:
    """Return the farzone id a job is constrained to, if any.

    Args:
        farzones: Configured farzone ids
        job: Job snapshot

    Returns:
        The configured farzone id (as configured, not as the job spells it), or
        None if the job has no availability zone hard constraint naming a farzone
    """
    if not farzones:
        return None
    zone = job.hard_constraints.get(JOB_CONSTRAINT_AVAILABILITY_ZONE)
    return _match_farzone(farzones, zone)
