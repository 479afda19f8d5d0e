"""Edge construct - public Application Load Balancer in front of the service."""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from components.compute import ComputeHandle, attach_service
from components.network import NetworkHandle
from topology.edge import EdgeSpec


@dataclass(frozen=True)
class EdgeHandle:
    load_balancer: aws.lb.LoadBalancer
    target_group: aws.lb.TargetGroup
    listener: aws.lb.Listener
    service: aws.ecs.Service
    dns_name: pulumi.Output[str]
    url: pulumi.Output[str]
    health_check_url: pulumi.Output[str]


def create_edge(
    name: str,
    spec: EdgeSpec,
    network: NetworkHandle,
    compute: ComputeHandle,
    tags: dict | None = None,
    opts: pulumi.ResourceOptions | None = None,
) -> EdgeHandle:
    """Declare the load balancer and route it to the compute service."""
    tags = tags or {}
    component = pulumi.ComponentResource("containerapi:edge:LoadBalancer", name, None, opts)
    child = pulumi.ResourceOptions(parent=component)

    load_balancer = aws.lb.LoadBalancer(
        f"{name}-alb",
        name=spec.load_balancer_name,
        internal=False,
        load_balancer_type="application",
        security_groups=[network.edge_security_group.id],
        subnets=network.public_subnet_ids,
        tags=tags,
        opts=child,
    )

    health = spec.health_check
    target_group = aws.lb.TargetGroup(
        f"{name}-tg",
        name=spec.target_group_name,
        port=spec.target_port,
        protocol=spec.target_protocol,
        target_type=spec.target_type,
        vpc_id=network.vpc_id,
        health_check=aws.lb.TargetGroupHealthCheckArgs(
            enabled=True,
            path=health.path,
            protocol=spec.target_protocol,
            port=str(spec.target_port),
            interval=health.interval,
            timeout=health.timeout,
            healthy_threshold=health.healthy_threshold,
            unhealthy_threshold=health.unhealthy_threshold,
        ),
        tags=tags,
        opts=child,
    )

    listener = aws.lb.Listener(
        f"{name}-listener",
        load_balancer_arn=load_balancer.arn,
        port=spec.listener_port,
        protocol=spec.listener_protocol,
        default_actions=[
            aws.lb.ListenerDefaultActionArgs(
                type="forward",
                target_group_arn=target_group.arn,
            )
        ],
        opts=child,
    )

    service = attach_service(compute, target_group, listener, tags=tags)

    dns_name = load_balancer.dns_name
    url = dns_name.apply(lambda d: f"http://{d}")
    health_check_url = dns_name.apply(lambda d: f"http://{d}{health.path}")

    component.register_outputs(
        {
            "load_balancer_dns": dns_name,
            "load_balancer_url": url,
            "health_check_url": health_check_url,
        }
    )

    return EdgeHandle(
        load_balancer=load_balancer,
        target_group=target_group,
        listener=listener,
        service=service,
        dns_name=dns_name,
        url=url,
        health_check_url=health_check_url,
    )
