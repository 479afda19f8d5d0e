"""Network specification and security group rules.

The network is a single VPC with a public-only subnet layout. Two security
groups sit on top of it:
- edge: the load balancer, open to HTTP/HTTPS from anywhere
- compute: the Fargate tasks, reachable only from the edge group
"""

import ipaddress
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from topology.errors import TopologyError

# An Application Load Balancer needs subnets in at least two AZs
MIN_EDGE_AZS = 2

ANYWHERE_IPV4 = "0.0.0.0/0"
EDGE_GROUP = "edge"
COMPUTE_GROUP = "compute"
EDGE_PORTS = (80, 443)


class SubnetVisibility(StrEnum):
    PUBLIC = "public"


class NetworkSpec(BaseModel):
    """Requested network layout.

    ``max_azs`` is what the caller asks for; ``effective_azs`` is what gets
    provisioned. Cost-optimized configs often ask for one AZ, which the load
    balancer cannot live with.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cidr_block: str = "10.0.0.0/16"
    max_azs: int = Field(default=1, ge=0)
    nat_gateways: int = Field(default=0, ge=0)
    subnet_cidr_mask: int = Field(default=24, ge=16, le=28)
    subnet_visibility: SubnetVisibility = SubnetVisibility.PUBLIC

    @field_validator("cidr_block")
    @classmethod
    def _valid_ipv4_network(cls, value: str) -> str:
        try:
            network = ipaddress.IPv4Network(value)
        except ValueError as e:
            raise ValueError(f"invalid IPv4 CIDR block {value!r}: {e}") from e
        return str(network)

    @property
    def effective_azs(self) -> int:
        """Number of availability zones actually provisioned."""
        return max(self.max_azs, MIN_EDGE_AZS)

    @model_validator(mode="after")
    def _layout_fits(self) -> "NetworkSpec":
        network = ipaddress.IPv4Network(self.cidr_block)
        if self.subnet_cidr_mask < network.prefixlen:
            raise ValueError(
                f"subnet mask /{self.subnet_cidr_mask} is wider than "
                f"the network {self.cidr_block}"
            )
        capacity = 2 ** (self.subnet_cidr_mask - network.prefixlen)
        if capacity < self.effective_azs:
            raise ValueError(
                f"{self.cidr_block} holds {capacity} /{self.subnet_cidr_mask} "
                f"subnets, {self.effective_azs} are required"
            )
        if self.nat_gateways > self.effective_azs:
            raise ValueError(
                f"nat_gateways={self.nat_gateways} exceeds the "
                f"{self.effective_azs} public subnets available"
            )
        return self

    def subnet_cidrs(self) -> list[str]:
        """CIDR blocks of the public subnets, one per effective AZ."""
        network = ipaddress.IPv4Network(self.cidr_block)
        subnets = network.subnets(new_prefix=self.subnet_cidr_mask)
        return [str(next(subnets)) for _ in range(self.effective_azs)]


class SecurityRule(BaseModel):
    """A single ingress rule.

    ``source`` is either a CIDR block or the name of another security group
    in the topology (``edge`` or ``compute``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    destination: str
    port: int = Field(ge=0, le=65535)
    protocol: str = "tcp"
    description: str = ""

    @property
    def from_group(self) -> bool:
        return self.source in (EDGE_GROUP, COMPUTE_GROUP)


def security_rules(container_port: int) -> list[SecurityRule]:
    """Return the full ingress rule set for both security groups."""
    return [
        SecurityRule(
            source=ANYWHERE_IPV4,
            destination=EDGE_GROUP,
            port=80,
            description="Allow HTTP traffic from internet",
        ),
        SecurityRule(
            source=ANYWHERE_IPV4,
            destination=EDGE_GROUP,
            port=443,
            description="Allow HTTPS traffic from internet",
        ),
        SecurityRule(
            source=EDGE_GROUP,
            destination=COMPUTE_GROUP,
            port=container_port,
            description="Allow traffic from ALB to ECS service",
        ),
    ]


def rules_for(rules: list[SecurityRule], destination: str) -> list[SecurityRule]:
    return [rule for rule in rules if rule.destination == destination]


def validate_security_rules(rules: list[SecurityRule]) -> None:
    """Reject rule sets that expose compute or widen the edge.

    Raises:
        TopologyError: If compute accepts traffic from anything other than
            the edge group, or edge accepts anything other than TCP 80/443
            from anywhere.
    """
    for rule in rules_for(rules, COMPUTE_GROUP):
        if rule.source != EDGE_GROUP:
            raise TopologyError(
                f"compute security group must only accept traffic from the "
                f"edge group, got source {rule.source!r}"
            )

    edge_rules = rules_for(rules, EDGE_GROUP)
    for rule in edge_rules:
        if rule.port not in EDGE_PORTS or rule.protocol != "tcp":
            raise TopologyError(
                f"edge security group only accepts TCP {EDGE_PORTS}, "
                f"got {rule.protocol}/{rule.port}"
            )
        if rule.source != ANYWHERE_IPV4:
            raise TopologyError(
                f"edge security group must be open to {ANYWHERE_IPV4}, "
                f"got {rule.source!r}"
            )
    missing = set(EDGE_PORTS) - {rule.port for rule in edge_rules}
    if missing:
        raise TopologyError(f"edge security group is missing ports {sorted(missing)}")
