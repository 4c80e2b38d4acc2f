"""Loading node and pod snapshots from manifest files or a live cluster.

Manifest files may hold a single object, a multi-document YAML stream, or a
List object (as written by ``kubectl get nodes -o yaml``). JSON files are read
the same way since JSON is valid YAML.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kube_bridge.exceptions import KubernetesError, SnapshotError
from kube_bridge.logging_config import get_logger
from kube_bridge.models.base import KubernetesObject
from kube_bridge.models.node import Node
from kube_bridge.models.pod import Pod

logger = get_logger(__name__)


def _iter_manifests(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise SnapshotError(
            f"Snapshot file not found: {path}",
            "Export one with: kubectl get nodes -o yaml > nodes.yaml",
        )

    try:
        with open(path) as f:
            documents = [d for d in yaml.safe_load_all(f) if d is not None]
    except yaml.YAMLError as e:
        raise SnapshotError(f"Failed to parse snapshot file: {path}", str(e))

    manifests = []
    for document in documents:
        if not isinstance(document, dict):
            raise SnapshotError(
                f"Unexpected document in snapshot file: {path}",
                f"Expected a Kubernetes object, got {type(document).__name__}",
            )
        if "items" in document:
            manifests.extend(item for item in document["items"] or [] if isinstance(item, dict))
        else:
            manifests.append(document)

    logger.debug(f"Read {len(manifests)} manifests from {path}")
    return manifests


def _load(path: str | Path, kind: str, model: type[KubernetesObject]) -> list:
    path = Path(path)
    objects = []
    for manifest in _iter_manifests(path):
        manifest_kind = manifest.get("kind", kind)
        if manifest_kind != kind:
            logger.debug(f"Skipping {manifest_kind} manifest in {path}")
            continue
        try:
            objects.append(model.from_manifest(manifest))
        except ValidationError as e:
            raise SnapshotError(f"Invalid {kind} manifest in {path}", str(e))
    return objects


def load_nodes(path: str | Path) -> list[Node]:
    """Load Node snapshots from a manifest file.

    Raises:
        SnapshotError: If the file is missing or holds invalid manifests
    """
    return _load(path, "Node", Node)


def load_pods(path: str | Path) -> list[Pod]:
    """Load Pod snapshots from a manifest file.

    Raises:
        SnapshotError: If the file is missing or holds invalid manifests
    """
    return _load(path, "Pod", Pod)


def _core_api():
    from kubernetes import client, config

    try:
        config.load_kube_config()
    except Exception as e:
        raise KubernetesError(
            f"Failed to load kubeconfig: {e}",
            "Make sure the kubeconfig is available at ~/.kube/config or set KUBECONFIG",
        )
    return client.CoreV1Api()


def fetch_nodes() -> list[Node]:
    """Read Node snapshots from the cluster in the current kubeconfig context."""
    from kubernetes.client.rest import ApiException

    api = _core_api()
    try:
        response = api.list_node()
    except ApiException as e:
        raise KubernetesError("Failed to list nodes", str(e))
    logger.info(f"Fetched {len(response.items)} nodes from the cluster")
    return [Node.from_kubernetes(item) for item in response.items]


def fetch_pods(namespace: str | None = None) -> list[Pod]:
    """Read Pod snapshots from the cluster, optionally from one namespace."""
    from kubernetes.client.rest import ApiException

    api = _core_api()
    try:
        if namespace:
            response = api.list_namespaced_pod(namespace)
        else:
            response = api.list_pod_for_all_namespaces()
    except ApiException as e:
        raise KubernetesError("Failed to list pods", str(e))
    logger.info(f"Fetched {len(response.items)} pods from the cluster")
    return [Pod.from_kubernetes(item) for item in response.items]
