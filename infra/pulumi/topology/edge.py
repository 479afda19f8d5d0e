"""Public load balancer specification."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from topology.compute import DEFAULT_CONTAINER_PORT


class TargetHealthCheckSpec(BaseModel):
    """Load balancer probe against each registered task."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = "/health"
    interval: int = Field(default=30, ge=5, le=300)
    timeout: int = Field(default=5, ge=2, le=120)
    healthy_threshold: int = Field(default=2, ge=2, le=10)
    unhealthy_threshold: int = Field(default=3, ge=2, le=10)

    @model_validator(mode="after")
    def _check_timing(self) -> "TargetHealthCheckSpec":
        if not self.path.startswith("/"):
            raise ValueError(f"health check path must be absolute, got {self.path!r}")
        if self.timeout >= self.interval:
            raise ValueError("health check timeout must be shorter than its interval")
        return self

    @property
    def unhealthy_after_seconds(self) -> int:
        """Worst-case time for a failing target to be marked unhealthy."""
        return self.unhealthy_threshold * self.interval

    @property
    def healthy_after_seconds(self) -> int:
        """Time for a recovering target to be marked healthy again."""
        return self.healthy_threshold * self.interval


class EdgeSpec(BaseModel):
    """Internet-facing load balancer, listener and target group."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    load_balancer_name: str = Field(default="container-api-alb", max_length=32)
    listener_port: int = 80
    listener_protocol: Literal["HTTP"] = "HTTP"
    target_group_name: str = Field(default="container-api-tg", max_length=32)
    target_port: int = Field(default=DEFAULT_CONTAINER_PORT, ge=1, le=65535)
    target_protocol: Literal["HTTP"] = "HTTP"
    target_type: Literal["ip"] = "ip"
    health_check: TargetHealthCheckSpec = TargetHealthCheckSpec()
