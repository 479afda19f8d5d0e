"""Deployment graph: the four construct specs and their dependencies."""

from collections import deque
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from topology.compute import ComputeSpec
from topology.edge import EdgeSpec
from topology.errors import TopologyError
from topology.network import NetworkSpec, security_rules, validate_security_rules
from topology.registry import RegistrySpec


class Construct(StrEnum):
    NETWORK = "network"
    REGISTRY = "registry"
    COMPUTE = "compute"
    EDGE = "edge"


# (dependency, dependent)
DEFAULT_EDGES: tuple[tuple[Construct, Construct], ...] = (
    (Construct.NETWORK, Construct.COMPUTE),
    (Construct.NETWORK, Construct.EDGE),
    (Construct.REGISTRY, Construct.COMPUTE),
    (Construct.COMPUTE, Construct.EDGE),
)


class DeploymentGraph(BaseModel):
    """Everything one deployment is made of.

    Built once per ``pulumi up``; ``check()`` must pass before any
    resource is declared.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    network: NetworkSpec = NetworkSpec()
    registry: RegistrySpec = RegistrySpec()
    compute: ComputeSpec = ComputeSpec()
    edge: EdgeSpec = EdgeSpec()
    edges: tuple[tuple[Construct, Construct], ...] = DEFAULT_EDGES

    def dependencies_of(self, node: Construct) -> list[Construct]:
        return [src for src, dst in self.edges if dst == node]

    def provisioning_order(self) -> list[Construct]:
        """Topologically sort the constructs.

        Ties are broken by declaration order so the result is stable.

        Raises:
            TopologyError: If the edges form a cycle.
        """
        nodes = list(Construct)
        for src, dst in self.edges:
            if src == dst:
                raise TopologyError(f"{src.value} cannot depend on itself")

        in_degree = {node: 0 for node in nodes}
        for _, dst in self.edges:
            in_degree[dst] += 1

        ready = deque(node for node in nodes if in_degree[node] == 0)
        order: list[Construct] = []
        while ready:
            node = ready.popleft()
            order.append(node)
            for src, dst in self.edges:
                if src == node:
                    in_degree[dst] -= 1
                    if in_degree[dst] == 0:
                        ready.append(dst)

        if len(order) != len(nodes):
            stuck = sorted(node.value for node in nodes if node not in order)
            raise TopologyError(f"dependency cycle between {stuck}")
        return order

    def check(self) -> list[Construct]:
        """Check cross-construct consistency and return the provisioning order."""
        missing = [(src, dst) for src, dst in DEFAULT_EDGES if (src, dst) not in self.edges]
        if missing:
            pairs = ", ".join(f"{src.value}->{dst.value}" for src, dst in missing)
            raise TopologyError(f"missing required dependencies: {pairs}")
        order = self.provisioning_order()

        if self.edge.target_port != self.compute.container_port:
            raise TopologyError(
                f"target group port {self.edge.target_port} does not match "
                f"container port {self.compute.container_port}"
            )
        if self.edge.health_check.path != "/health":
            # The container probes /health too; keep both checks on one route
            raise TopologyError(
                f"target health check path must be /health, got {self.edge.health_check.path!r}"
            )
        validate_security_rules(security_rules(self.compute.container_port))
        return order
