"""Registry construct - ECR repository for the application image.

One repository, scanned on push, with a single lifecycle rule expiring
untagged images.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from topology.registry import DeletionPolicy, RegistrySpec, lifecycle_policy


@dataclass(frozen=True)
class RegistryHandle:
    repository: aws.ecr.Repository
    repository_url: pulumi.Output[str]
    repository_arn: pulumi.Output[str]


def create_registry(
    name: str,
    spec: RegistrySpec,
    tags: dict | None = None,
    opts: pulumi.ResourceOptions | None = None,
) -> RegistryHandle:
    """Declare the image repository and its lifecycle policy."""
    tags = tags or {}
    component = pulumi.ComponentResource("containerapi:container:Registry", name, None, opts)

    destroy = spec.deletion_policy == DeletionPolicy.DESTROY

    repository = aws.ecr.Repository(
        f"{name}-repo",
        name=spec.repository_name,
        image_tag_mutability="MUTABLE",
        image_scanning_configuration=aws.ecr.RepositoryImageScanningConfigurationArgs(
            scan_on_push=spec.scan_on_push,
        ),
        force_delete=destroy,
        tags={**tags, "Name": spec.repository_name},
        opts=pulumi.ResourceOptions(parent=component, retain_on_delete=not destroy),
    )

    aws.ecr.LifecyclePolicy(
        f"{name}-repo-lifecycle",
        repository=repository.name,
        policy=lifecycle_policy(spec),
        opts=pulumi.ResourceOptions(parent=component),
    )

    component.register_outputs(
        {
            "repository_url": repository.repository_url,
        }
    )

    return RegistryHandle(
        repository=repository,
        repository_url=repository.repository_url,
        repository_arn=repository.arn,
    )
