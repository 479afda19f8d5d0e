"""Fargate compute specification."""

import json

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Valid Fargate memory values (MiB) per CPU unit count
FARGATE_MEMORY_BY_CPU: dict[int, tuple[int, ...]] = {
    256: (512, 1024, 2048),
    512: tuple(range(1024, 4096 + 1, 1024)),
    1024: tuple(range(2048, 8192 + 1, 1024)),
    2048: tuple(range(4096, 16384 + 1, 1024)),
    4096: tuple(range(8192, 30720 + 1, 1024)),
    8192: tuple(range(16384, 61440 + 1, 4096)),
    16384: tuple(range(32768, 122880 + 1, 8192)),
}

# CloudWatch Logs only accepts these retention periods
LOG_RETENTION_DAYS = (
    1, 3, 5, 7, 14, 30, 60, 90, 120, 150, 180, 365, 400, 545,
    731, 1096, 1827, 2192, 2557, 2922, 3288, 3653,
)  # fmt: skip

DEFAULT_CONTAINER_PORT = 3000


class HealthCheckSpec(BaseModel):
    """Container-level health check run by the ECS agent."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command: tuple[str, ...] | None = None
    interval: int = Field(default=30, ge=5, le=300)
    timeout: int = Field(default=5, ge=2, le=120)
    retries: int = Field(default=3, ge=1, le=10)
    start_period: int = Field(default=60, ge=0, le=300)

    def command_for(self, port: int) -> list[str]:
        if self.command:
            return list(self.command)
        probe = f"import urllib.request; urllib.request.urlopen('http://localhost:{port}/health', timeout=4)"
        return ["CMD-SHELL", f"python -c \"{probe}\" || exit 1"]


class ComputeSpec(BaseModel):
    """Cluster, task specification and running service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cluster_name: str = "container-api-cluster"
    service_name: str = "container-api-service"
    container_name: str = "container-api"
    cpu_units: int = 256
    memory_mib: int = 512
    replica_count: int = Field(default=1, ge=1)
    container_port: int = Field(default=DEFAULT_CONTAINER_PORT, ge=1, le=65535)
    image_tag: str = "latest"
    health_check: HealthCheckSpec = HealthCheckSpec()
    health_check_grace_period: int = Field(default=60, ge=0)
    environment: dict[str, str] | None = None
    log_group_name: str = "/ecs/container-api-env"
    log_stream_prefix: str = "container-api"
    log_retention_days: int = 1
    container_insights: bool = False

    @model_validator(mode="after")
    def _check_allocation(self) -> "ComputeSpec":
        allowed = FARGATE_MEMORY_BY_CPU.get(self.cpu_units)
        if allowed is None:
            raise ValueError(
                f"cpu_units={self.cpu_units} is not a Fargate size, "
                f"expected one of {sorted(FARGATE_MEMORY_BY_CPU)}"
            )
        if self.memory_mib not in allowed:
            raise ValueError(
                f"memory_mib={self.memory_mib} is not valid with "
                f"cpu_units={self.cpu_units}, expected one of {list(allowed)}"
            )
        if self.log_retention_days not in LOG_RETENTION_DAYS:
            raise ValueError(
                f"log_retention_days={self.log_retention_days} is not a "
                f"CloudWatch retention period"
            )
        if self.health_check.timeout >= self.health_check.interval:
            raise ValueError("health check timeout must be shorter than its interval")
        return self

    @property
    def container_environment(self) -> dict[str, str]:
        """Environment variables handed to the container."""
        if self.environment is not None:
            return dict(self.environment)
        return {
            "ENVIRONMENT": "production",
            "PORT": str(self.container_port),
        }


def container_definitions(
    spec: ComputeSpec,
    repository_url: str,
    log_group_name: str,
    region: str,
) -> str:
    """Render the task definition's container list as JSON."""
    health = spec.health_check
    return json.dumps(
        [
            {
                "name": spec.container_name,
                "image": f"{repository_url}:{spec.image_tag}",
                "essential": True,
                "portMappings": [
                    {
                        "containerPort": spec.container_port,
                        "protocol": "tcp",
                    }
                ],
                "logConfiguration": {
                    "logDriver": "awslogs",
                    "options": {
                        "awslogs-group": log_group_name,
                        "awslogs-region": region,
                        "awslogs-stream-prefix": spec.log_stream_prefix,
                    },
                },
                "healthCheck": {
                    "command": health.command_for(spec.container_port),
                    "interval": health.interval,
                    "timeout": health.timeout,
                    "retries": health.retries,
                    "startPeriod": health.start_period,
                },
                "environment": [
                    {"name": key, "value": value}
                    for key, value in sorted(spec.container_environment.items())
                ],
            }
        ]
    )
