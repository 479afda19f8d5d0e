"""Compute construct - ECS Fargate cluster, task definition and service.

Two IAM identities per task:
- Execution role: pulls from the one registry, writes to the one log group
- Task role: assumed by the application, no permissions of its own

The running service is declared by ``attach_service`` once the edge has a
target group for it; ECS binds a service to its load balancer at creation.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from components.network import NetworkHandle
from components.registry import RegistryHandle
from topology.compute import ComputeSpec, container_definitions
from topology.iam import assume_role_policy, execution_role_policy


@dataclass(frozen=True)
class ComputeHandle:
    name: str
    component: pulumi.ComponentResource
    spec: ComputeSpec
    cluster: aws.ecs.Cluster
    cluster_name: pulumi.Output[str]
    service_name: str
    log_group: aws.cloudwatch.LogGroup
    execution_role: aws.iam.Role
    execution_policy: aws.iam.RolePolicy
    task_role: aws.iam.Role
    task_definition: aws.ecs.TaskDefinition
    subnet_ids: pulumi.Output[list[str]]
    security_group_ids: list[pulumi.Output[str]]


def create_compute(
    name: str,
    spec: ComputeSpec,
    network: NetworkHandle,
    registry: RegistryHandle,
    region: str,
    tags: dict | None = None,
    opts: pulumi.ResourceOptions | None = None,
) -> ComputeHandle:
    """Declare the cluster, log sink, task identities and task definition."""
    tags = tags or {}
    component = pulumi.ComponentResource("containerapi:compute:Fargate", name, None, opts)
    child = pulumi.ResourceOptions(parent=component)

    cluster = aws.ecs.Cluster(
        f"{name}-cluster",
        name=spec.cluster_name,
        settings=[
            aws.ecs.ClusterSettingArgs(
                name="containerInsights",
                value="enabled" if spec.container_insights else "disabled",
            )
        ],
        tags=tags,
        opts=child,
    )

    # Deleted together with the stack
    log_group = aws.cloudwatch.LogGroup(
        f"{name}-logs",
        name=spec.log_group_name,
        retention_in_days=spec.log_retention_days,
        tags=tags,
        opts=child,
    )

    execution_role = aws.iam.Role(
        f"{name}-exec-role",
        assume_role_policy=assume_role_policy(),
        tags=tags,
        opts=child,
    )

    execution_policy = aws.iam.RolePolicy(
        f"{name}-exec-policy",
        role=execution_role.id,
        policy=pulumi.Output.all(registry.repository_arn, log_group.arn).apply(
            lambda args: execution_role_policy(args[0], args[1])
        ),
        opts=child,
    )

    task_role = aws.iam.Role(
        f"{name}-task-role",
        assume_role_policy=assume_role_policy(),
        tags=tags,
        opts=child,
    )

    task_definition = aws.ecs.TaskDefinition(
        f"{name}-task",
        family=f"{spec.service_name}-task",
        cpu=str(spec.cpu_units),
        memory=str(spec.memory_mib),
        network_mode="awsvpc",
        requires_compatibilities=["FARGATE"],
        execution_role_arn=execution_role.arn,
        task_role_arn=task_role.arn,
        container_definitions=pulumi.Output.all(
            registry.repository_url, log_group.name
        ).apply(lambda args: container_definitions(spec, args[0], args[1], region)),
        tags=tags,
        opts=pulumi.ResourceOptions(parent=component, depends_on=[log_group]),
    )

    component.register_outputs(
        {
            "cluster_name": cluster.name,
            "task_definition_arn": task_definition.arn,
            "log_group_name": log_group.name,
        }
    )

    return ComputeHandle(
        name=name,
        component=component,
        spec=spec,
        cluster=cluster,
        cluster_name=cluster.name,
        service_name=spec.service_name,
        log_group=log_group,
        execution_role=execution_role,
        execution_policy=execution_policy,
        task_role=task_role,
        task_definition=task_definition,
        subnet_ids=network.public_subnet_ids,
        security_group_ids=[network.compute_security_group.id],
    )


def attach_service(
    compute: ComputeHandle,
    target_group: aws.lb.TargetGroup,
    listener: aws.lb.Listener,
    tags: dict | None = None,
) -> aws.ecs.Service:
    """Run the service and register its tasks with ``target_group``.

    Tasks land in public subnets with a public IP; there is no NAT gateway
    for image pulls to go through.
    """
    spec = compute.spec
    return aws.ecs.Service(
        f"{compute.name}-service",
        name=spec.service_name,
        cluster=compute.cluster.arn,
        task_definition=compute.task_definition.arn,
        desired_count=spec.replica_count,
        launch_type="FARGATE",
        platform_version="LATEST",
        health_check_grace_period_seconds=spec.health_check_grace_period,
        network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
            assign_public_ip=True,
            subnets=compute.subnet_ids,
            security_groups=compute.security_group_ids,
        ),
        load_balancers=[
            aws.ecs.ServiceLoadBalancerArgs(
                target_group_arn=target_group.arn,
                container_name=spec.container_name,
                container_port=spec.container_port,
            )
        ],
        tags=tags or {},
        # The target group must be attached to a listener first
        opts=pulumi.ResourceOptions(parent=compute.component, depends_on=[listener]),
    )
