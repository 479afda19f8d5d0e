"""Unit tests for the deployment graph."""

import pytest

from topology import ComputeSpec, EdgeSpec, TargetHealthCheckSpec
from topology.errors import TopologyError
from topology.graph import DEFAULT_EDGES, Construct, DeploymentGraph


def test_default_edges():
    assert set(DEFAULT_EDGES) == {
        (Construct.NETWORK, Construct.COMPUTE),
        (Construct.NETWORK, Construct.EDGE),
        (Construct.REGISTRY, Construct.COMPUTE),
        (Construct.COMPUTE, Construct.EDGE),
    }


def test_provisioning_order():
    assert DeploymentGraph().provisioning_order() == [
        Construct.NETWORK,
        Construct.REGISTRY,
        Construct.COMPUTE,
        Construct.EDGE,
    ]


def test_order_respects_every_edge():
    graph = DeploymentGraph()
    order = graph.provisioning_order()
    for src, dst in graph.edges:
        assert order.index(src) < order.index(dst)


def test_dependencies_of_compute():
    assert DeploymentGraph().dependencies_of(Construct.COMPUTE) == [
        Construct.NETWORK,
        Construct.REGISTRY,
    ]


def test_cycle_rejected():
    graph = DeploymentGraph(edges=DEFAULT_EDGES + ((Construct.EDGE, Construct.NETWORK),))
    with pytest.raises(TopologyError, match="cycle"):
        graph.provisioning_order()


def test_self_dependency_rejected():
    graph = DeploymentGraph(edges=((Construct.COMPUTE, Construct.COMPUTE),))
    with pytest.raises(TopologyError, match="itself"):
        graph.provisioning_order()


def test_check_returns_order():
    assert DeploymentGraph().check()[-1] == Construct.EDGE


def test_port_mismatch_rejected():
    graph = DeploymentGraph(compute=ComputeSpec(container_port=8080), edge=EdgeSpec(target_port=3000))
    with pytest.raises(TopologyError, match="port"):
        graph.check()


def test_health_path_mismatch_rejected():
    graph = DeploymentGraph(
        edge=EdgeSpec(health_check=TargetHealthCheckSpec(path="/ready")),
    )
    with pytest.raises(TopologyError, match="/health"):
        graph.check()


def test_missing_dependency_rejected_by_check():
    graph = DeploymentGraph(edges=((Construct.EDGE, Construct.NETWORK),))
    with pytest.raises(TopologyError, match="network->compute"):
        graph.check()


def test_extra_dependency_allowed():
    graph = DeploymentGraph(edges=DEFAULT_EDGES + ((Construct.REGISTRY, Construct.EDGE),))
    assert graph.check() == [
        Construct.NETWORK,
        Construct.REGISTRY,
        Construct.COMPUTE,
        Construct.EDGE,
    ]
