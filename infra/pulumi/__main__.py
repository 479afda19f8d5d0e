"""Container API Infrastructure - Main Entry Point.

Deploys the API container on AWS with Pulumi:
- Network: VPC with public subnets in at least two AZs
- Registry: ECR repository for the API image
- Compute: ECS Fargate cluster, task definition and service
- Edge: internet-facing Application Load Balancer
"""

import pulumi

from deployment import deploy
from topology import (
    ComputeSpec,
    DeploymentGraph,
    EdgeSpec,
    NetworkSpec,
    RegistrySpec,
)

# Get configuration
config = pulumi.Config()
aws_config = pulumi.Config("aws")
environment = pulumi.get_stack()  # dev, staging, or prod
aws_region = aws_config.require("region")

container_port = config.get_int("container_port") or 3000

# 0 is a valid request; the network floors it to two AZs
max_azs = config.get_int("max_azs")
if max_azs is None:
    max_azs = 1

# Common tags for all resources
common_tags = {
    "Project": "container-api",
    "Environment": environment,
    "ManagedBy": "pulumi",
}

# =============================================================================
# Topology - validated before anything is declared
# =============================================================================
graph = DeploymentGraph(
    network=NetworkSpec(
        cidr_block=config.get("vpc_cidr") or "10.0.0.0/16",
        max_azs=max_azs,
        nat_gateways=config.get_int("nat_gateways") or 0,
    ),
    registry=RegistrySpec(
        repository_name=config.get("repository_name") or "container-api-env",
        max_untagged_age_days=config.get_int("max_untagged_age_days") or 7,
    ),
    compute=ComputeSpec(
        cpu_units=config.get_int("cpu") or 256,
        memory_mib=config.get_int("memory") or 512,
        replica_count=config.get_int("desired_count") or 1,
        container_port=container_port,
        image_tag=config.get("image_tag") or "latest",
        log_retention_days=config.get_int("log_retention_days") or 1,
        environment={
            "ENVIRONMENT": "production",
            "PORT": str(container_port),
        },
    ),
    edge=EdgeSpec(target_port=container_port),
)

# =============================================================================
# Constructs + Stack Outputs
# =============================================================================
outputs = deploy(graph, prefix=environment, region=aws_region, tags=common_tags)
outputs.export()
