"""Tests for the top-level composition."""

import pulumi
import pytest
from pydantic import ValidationError

from deployment import deploy
from pulumi_mocks import REGION, run_program
from topology import ComputeSpec, DeploymentGraph, EdgeSpec, TopologyError


def test_outputs(mocks, tags):
    def program():
        outputs = deploy(DeploymentGraph(), prefix="test", region=REGION, tags=tags)

        def check(args):
            vpc_id, repo_url, cluster, service, dns, url, health_url = args
            assert vpc_id == "test-network-vpc_id"
            assert repo_url.endswith("/container-api-env")
            assert cluster == "container-api-cluster"
            assert service == "container-api-service"
            assert url == f"http://{dns}"
            assert health_url == f"http://{dns}/health"

        return pulumi.Output.all(
            outputs.vpc_id,
            outputs.ecr_repository_url,
            outputs.cluster_name,
            outputs.service_name,
            outputs.load_balancer_dns,
            outputs.load_balancer_url,
            outputs.health_check_url,
        ).apply(check)

    run_program(program)


def test_every_construct_declared(mocks):
    def program():
        deploy(DeploymentGraph(), prefix="test", region=REGION)

    run_program(program)

    types = {r.typ for r in mocks.resources}
    for typ in (
        "aws:ec2/vpc:Vpc",
        "aws:ecr/repository:Repository",
        "aws:ecs/taskDefinition:TaskDefinition",
        "aws:ecs/service:Service",
        "aws:lb/loadBalancer:LoadBalancer",
        "aws:lb/listener:Listener",
    ):
        assert typ in types


def test_inconsistent_graph_declares_nothing(mocks):
    graph = DeploymentGraph(compute=ComputeSpec(container_port=8080), edge=EdgeSpec(target_port=3000))

    with pytest.raises(TopologyError):
        deploy(graph, prefix="test", region=REGION)
    assert [r for r in mocks.resources if r.typ.startswith("aws:")] == []


def test_invalid_allocation_fails_before_deploy():
    with pytest.raises(ValidationError):
        DeploymentGraph(compute=ComputeSpec(cpu_units=256, memory_mib=4096))
