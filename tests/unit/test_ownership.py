"""Unit tests for scheduler ownership arbitration."""

import logging

from conftest import make_node, scheduler_taint

from kube_bridge.config import BridgeConfig
from kube_bridge.constants import TAINT_SCHEDULER
from kube_bridge.models import Pod, Toleration
from kube_bridge.ownership import (
    filter_legacy_owned_nodes,
    has_legacy_scheduler_taint,
    is_node_owned_by_legacy_scheduler,
    is_owned_by_modern_scheduler,
)

CUSTOM_TAINT = "node.kube-bridge.io/gpu"


def test_untainted_node_is_owned():
    assert is_node_owned_by_legacy_scheduler([], set(), make_node())


def test_mixed_case_fenzo_taint_is_owned():
    node = make_node(taints=[scheduler_taint("Fenzo")])
    assert is_node_owned_by_legacy_scheduler([], set(), node)


def test_padded_fenzo_taint_is_owned():
    node = make_node(taints=[scheduler_taint("  fenzo "), scheduler_taint("FENZO")])
    assert has_legacy_scheduler_taint(node)
    assert is_node_owned_by_legacy_scheduler([], set(), node)


def test_kubescheduler_taint_is_not_owned():
    node = make_node(taints=[scheduler_taint("kubeScheduler")])
    assert not has_legacy_scheduler_taint(node)
    assert not is_node_owned_by_legacy_scheduler([], set(), node)


def test_ambiguous_scheduler_taints_are_not_owned():
    node = make_node(taints=[scheduler_taint("fenzo"), scheduler_taint("kubescheduler")])
    assert not has_legacy_scheduler_taint(node)
    assert not is_node_owned_by_legacy_scheduler([], set(), node)


def test_scheduler_taint_without_value_is_not_owned():
    node = make_node(taints=[scheduler_taint(None)])
    assert not is_node_owned_by_legacy_scheduler([], set(), node)


def test_custom_taint_requires_toleration():
    node = make_node(taints=[scheduler_taint("fenzo"), (CUSTOM_TAINT, "true")])

    assert not is_node_owned_by_legacy_scheduler([], set(), node)
    assert is_node_owned_by_legacy_scheduler([], {CUSTOM_TAINT}, node)


def test_tolerated_taint_without_scheduler_taint_is_owned():
    node = make_node(taints=[(CUSTOM_TAINT, "true")])
    assert is_node_owned_by_legacy_scheduler([], frozenset({CUSTOM_TAINT}), node)


def test_farzone_takes_precedence_over_taints():
    node = make_node(zone="us-east-1f", taints=[scheduler_taint("fenzo")])
    assert not is_node_owned_by_legacy_scheduler(["US-EAST-1F"], set(), node)


def test_decision_is_logged(caplog):
    node = make_node(name="node-7", taints=[(CUSTOM_TAINT, "true")])
    with caplog.at_level(logging.DEBUG, logger="kube_bridge.ownership"):
        is_node_owned_by_legacy_scheduler([], set(), node)
    assert "non tolerable taint found" in caplog.text
    assert "node-7" in caplog.text


def test_filter_legacy_owned_nodes_keeps_order():
    config = BridgeConfig(farzones=("us-east-1f",), tolerated_taint_keys=frozenset({CUSTOM_TAINT}))
    nodes = [
        make_node(name="c", taints=[(CUSTOM_TAINT, "true")]),
        make_node(name="b", zone="us-east-1f"),
        make_node(name="a"),
        make_node(name="d", taints=[scheduler_taint("kubescheduler")]),
    ]
    assert [n.name for n in filter_legacy_owned_nodes(config, nodes)] == ["c", "a"]


def test_pod_tolerating_kubescheduler_is_modern():
    pod = Pod(
        name="task-1",
        tolerations=(Toleration(key=TAINT_SCHEDULER, operator="Equal", value="kubeScheduler"),),
    )
    assert is_owned_by_modern_scheduler(pod)


def test_pod_tolerating_fenzo_is_not_modern():
    pod = Pod(name="task-1", tolerations=(Toleration(key=TAINT_SCHEDULER, value="fenzo"),))
    assert not is_owned_by_modern_scheduler(pod)


def test_pod_without_tolerations_is_not_modern():
    assert not is_owned_by_modern_scheduler(Pod(name="task-1"))


def test_kubescheduler_value_under_other_key_is_not_modern():
    pod = Pod(name="task-1", tolerations=(Toleration(key="dedicated", value="kubescheduler"),))
    assert not is_owned_by_modern_scheduler(pod)
