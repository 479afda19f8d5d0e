"""Components package for Pulumi infrastructure.

Each construct is a function that declares its resources under a
component node and returns a handle for the constructs that depend on it:
- create_network: VPC, public subnets, edge/compute security groups
- create_registry: ECR repository
- create_compute: ECS cluster, task identities, task definition
- create_edge: Application Load Balancer and service attachment
"""

from components.compute import ComputeHandle, attach_service, create_compute
from components.edge import EdgeHandle, create_edge
from components.network import NetworkHandle, create_network
from components.registry import RegistryHandle, create_registry

__all__ = [
    "ComputeHandle",
    "EdgeHandle",
    "NetworkHandle",
    "RegistryHandle",
    "attach_service",
    "create_compute",
    "create_edge",
    "create_network",
    "create_registry",
]
