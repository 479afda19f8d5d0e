"""Top-level composition of the four constructs.

The only place where constructs are wired to each other: every handle a
construct needs is threaded in here, in the graph's provisioning order.
"""

from dataclasses import dataclass

import pulumi

from components.compute import ComputeHandle, create_compute
from components.edge import EdgeHandle, create_edge
from components.network import NetworkHandle, create_network
from components.registry import RegistryHandle, create_registry
from topology.graph import Construct, DeploymentGraph


@dataclass(frozen=True)
class DeploymentOutputs:
    """Identifiers republished as stack outputs."""

    vpc_id: pulumi.Output[str]
    ecr_repository_url: pulumi.Output[str]
    cluster_name: pulumi.Output[str]
    service_name: pulumi.Output[str]
    load_balancer_dns: pulumi.Output[str]
    load_balancer_url: pulumi.Output[str]
    health_check_url: pulumi.Output[str]

    def export(self) -> None:
        for key, value in vars(self).items():
            pulumi.export(key, value)


@dataclass
class _Handles:
    network: NetworkHandle | None = None
    registry: RegistryHandle | None = None
    compute: ComputeHandle | None = None
    edge: EdgeHandle | None = None


def deploy(
    graph: DeploymentGraph,
    prefix: str,
    region: str,
    tags: dict | None = None,
) -> DeploymentOutputs:
    """Validate ``graph`` and declare every construct in dependency order.

    Raises:
        TopologyError: If the graph is inconsistent. Nothing is declared.
    """
    order = graph.check()
    pulumi.log.info(f"Provisioning order: {', '.join(c.value for c in order)}")

    handles = _Handles()
    for construct in order:
        if construct == Construct.NETWORK:
            handles.network = create_network(
                f"{prefix}-network",
                graph.network,
                container_port=graph.compute.container_port,
                tags=tags,
            )
        elif construct == Construct.REGISTRY:
            handles.registry = create_registry(
                f"{prefix}-registry",
                graph.registry,
                tags=tags,
            )
        elif construct == Construct.COMPUTE:
            handles.compute = create_compute(
                f"{prefix}-compute",
                graph.compute,
                network=handles.network,
                registry=handles.registry,
                region=region,
                tags=tags,
            )
        elif construct == Construct.EDGE:
            handles.edge = create_edge(
                f"{prefix}-edge",
                graph.edge,
                network=handles.network,
                compute=handles.compute,
                tags=tags,
            )

    return DeploymentOutputs(
        vpc_id=handles.network.vpc_id,
        ecr_repository_url=handles.registry.repository_url,
        cluster_name=handles.compute.cluster_name,
        service_name=handles.edge.service.name,
        load_balancer_dns=handles.edge.dns_name,
        load_balancer_url=handles.edge.url,
        health_check_url=handles.edge.health_check_url,
    )
