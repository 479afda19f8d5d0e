"""IAM policy documents for the Fargate task identities.

Two principals run every task:
- execution role: used by the ECS agent to pull the image and ship logs
- task role: assumed by the application itself, starts with no permissions
"""

import json

ECS_TASKS_PRINCIPAL = "ecs-tasks.amazonaws.com"

REGISTRY_PULL_ACTIONS = (
    "ecr:BatchCheckLayerAvailability",
    "ecr:GetDownloadUrlForLayer",
    "ecr:BatchGetImage",
)

# GetAuthorizationToken has no resource-level permissions
REGISTRY_AUTH_ACTION = "ecr:GetAuthorizationToken"

LOG_WRITE_ACTIONS = (
    "logs:CreateLogStream",
    "logs:PutLogEvents",
)


def assume_role_policy() -> str:
    """Trust policy letting ECS tasks assume a role."""
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "sts:AssumeRole",
                    "Principal": {"Service": ECS_TASKS_PRINCIPAL},
                    "Effect": "Allow",
                }
            ],
        }
    )


def execution_role_policy(repository_arn: str, log_group_arn: str) -> str:
    """Least-privilege policy for the execution role.

    Image pulls are scoped to exactly ``repository_arn``; log writes to the
    streams of ``log_group_arn``.
    """
    if not repository_arn or "*" in repository_arn:
        raise ValueError(f"registry pull must target one repository, got {repository_arn!r}")

    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Sid": "RegistryPull",
                    "Effect": "Allow",
                    "Action": list(REGISTRY_PULL_ACTIONS),
                    "Resource": [repository_arn],
                },
                {
                    "Sid": "RegistryAuth",
                    "Effect": "Allow",
                    "Action": [REGISTRY_AUTH_ACTION],
                    "Resource": "*",
                },
                {
                    "Sid": "LogWrite",
                    "Effect": "Allow",
                    "Action": list(LOG_WRITE_ACTIONS),
                    "Resource": [f"{log_group_arn}:*"],
                },
            ],
        }
    )
