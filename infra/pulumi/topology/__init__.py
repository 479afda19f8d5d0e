"""Deployment topology model.

Typed, validated configuration for the four constructs (network, registry,
compute, edge) and the graph that orders them. Nothing here talks to AWS.
"""

from topology.compute import ComputeSpec, HealthCheckSpec
from topology.edge import EdgeSpec, TargetHealthCheckSpec
from topology.errors import TopologyError
from topology.graph import Construct, DeploymentGraph
from topology.network import NetworkSpec, SecurityRule, security_rules
from topology.registry import DeletionPolicy, RegistrySpec

__all__ = [
    "ComputeSpec",
    "Construct",
    "DeletionPolicy",
    "DeploymentGraph",
    "EdgeSpec",
    "HealthCheckSpec",
    "NetworkSpec",
    "RegistrySpec",
    "SecurityRule",
    "TargetHealthCheckSpec",
    "TopologyError",
    "security_rules",
]
