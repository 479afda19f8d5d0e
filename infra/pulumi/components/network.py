"""Network construct - VPC, public subnets and the two security groups.

Creates a VPC with a public-only subnet layout across at least two
availability zones (the load balancer requirement), plus:
- Edge security group: HTTP/HTTPS from anywhere
- Compute security group: container port from the edge group only
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.errors import TopologyError
from topology.network import (
    ANYWHERE_IPV4,
    COMPUTE_GROUP,
    EDGE_GROUP,
    NetworkSpec,
    SecurityRule,
    rules_for,
    security_rules,
)


@dataclass(frozen=True)
class NetworkHandle:
    """What downstream constructs get to see of the network."""

    vpc: aws.ec2.Vpc
    vpc_id: pulumi.Output[str]
    public_subnets: list[aws.ec2.Subnet]
    public_subnet_ids: pulumi.Output[list[str]]
    edge_security_group: aws.ec2.SecurityGroup
    compute_security_group: aws.ec2.SecurityGroup
    availability_zones: list[str]
    rules: list[SecurityRule]


def _allow_all_egress() -> list[aws.ec2.SecurityGroupEgressArgs]:
    return [
        aws.ec2.SecurityGroupEgressArgs(
            protocol="-1",
            from_port=0,
            to_port=0,
            cidr_blocks=[ANYWHERE_IPV4],
        )
    ]


def _ingress(
    rule: SecurityRule, group_ids: dict[str, pulumi.Input[str]]
) -> aws.ec2.SecurityGroupIngressArgs:
    if rule.from_group:
        return aws.ec2.SecurityGroupIngressArgs(
            protocol=rule.protocol,
            from_port=rule.port,
            to_port=rule.port,
            security_groups=[group_ids[rule.source]],
            description=rule.description,
        )
    return aws.ec2.SecurityGroupIngressArgs(
        protocol=rule.protocol,
        from_port=rule.port,
        to_port=rule.port,
        cidr_blocks=[rule.source],
        description=rule.description,
    )


def create_network(
    name: str,
    spec: NetworkSpec,
    container_port: int,
    tags: dict | None = None,
    opts: pulumi.ResourceOptions | None = None,
) -> NetworkHandle:
    """Declare the network and return its handle."""
    tags = tags or {}
    component = pulumi.ComponentResource("containerapi:network:Network", name, None, opts)
    child = pulumi.ResourceOptions(parent=component)

    available_azs = aws.get_availability_zones(state="available")
    if len(available_azs.names) < spec.effective_azs:
        raise TopologyError(
            f"region offers {len(available_azs.names)} availability zones, "
            f"{spec.effective_azs} are required"
        )
    az_names = available_azs.names[: spec.effective_azs]

    vpc = aws.ec2.Vpc(
        f"{name}-vpc",
        cidr_block=spec.cidr_block,
        enable_dns_hostnames=True,
        enable_dns_support=True,
        tags={**tags, "Name": f"{name}-vpc"},
        opts=child,
    )

    igw = aws.ec2.InternetGateway(
        f"{name}-igw",
        vpc_id=vpc.id,
        tags={**tags, "Name": f"{name}-igw"},
        opts=child,
    )

    public_rt = aws.ec2.RouteTable(
        f"{name}-public-rt",
        vpc_id=vpc.id,
        routes=[
            aws.ec2.RouteTableRouteArgs(
                cidr_block=ANYWHERE_IPV4,
                gateway_id=igw.id,
            ),
        ],
        tags={**tags, "Name": f"{name}-public-rt"},
        opts=child,
    )

    public_subnets: list[aws.ec2.Subnet] = []
    for i, (az, cidr) in enumerate(zip(az_names, spec.subnet_cidrs())):
        subnet = aws.ec2.Subnet(
            f"{name}-public-{i}",
            vpc_id=vpc.id,
            cidr_block=cidr,
            availability_zone=az,
            map_public_ip_on_launch=True,
            tags={**tags, "Name": f"{name}-public-{az}"},
            opts=child,
        )
        public_subnets.append(subnet)

        aws.ec2.RouteTableAssociation(
            f"{name}-public-rta-{i}",
            subnet_id=subnet.id,
            route_table_id=public_rt.id,
            opts=child,
        )

    # Public-only layout: tasks get public IPs, NAT is opt-in
    for i in range(spec.nat_gateways):
        eip = aws.ec2.Eip(
            f"{name}-eip-{i}",
            domain="vpc",
            tags={**tags, "Name": f"{name}-nat-eip-{az_names[i]}"},
            opts=child,
        )
        aws.ec2.NatGateway(
            f"{name}-nat-{i}",
            subnet_id=public_subnets[i].id,
            allocation_id=eip.id,
            tags={**tags, "Name": f"{name}-nat-{az_names[i]}"},
            opts=pulumi.ResourceOptions(parent=component, depends_on=[igw]),
        )

    rules = security_rules(container_port)

    edge_sg = aws.ec2.SecurityGroup(
        f"{name}-edge-sg",
        vpc_id=vpc.id,
        description="Security group for Application Load Balancer",
        ingress=[_ingress(rule, {}) for rule in rules_for(rules, EDGE_GROUP)],
        egress=_allow_all_egress(),
        tags={**tags, "Name": f"{name}-edge-sg"},
        opts=child,
    )

    compute_sg = aws.ec2.SecurityGroup(
        f"{name}-compute-sg",
        vpc_id=vpc.id,
        description="Security group for ECS Fargate service",
        ingress=[
            _ingress(rule, {EDGE_GROUP: edge_sg.id})
            for rule in rules_for(rules, COMPUTE_GROUP)
        ],
        egress=_allow_all_egress(),
        tags={**tags, "Name": f"{name}-compute-sg"},
        opts=child,
    )

    public_subnet_ids = pulumi.Output.all(*[s.id for s in public_subnets]).apply(
        lambda ids: list(ids)
    )

    component.register_outputs(
        {
            "vpc_id": vpc.id,
            "public_subnet_ids": public_subnet_ids,
            "edge_security_group_id": edge_sg.id,
            "compute_security_group_id": compute_sg.id,
        }
    )

    return NetworkHandle(
        vpc=vpc,
        vpc_id=vpc.id,
        public_subnets=public_subnets,
        public_subnet_ids=public_subnet_ids,
        edge_security_group=edge_sg,
        compute_security_group=compute_sg,
        availability_zones=az_names,
        rules=rules,
    )
