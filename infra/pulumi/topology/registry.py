"""Container image registry specification."""

import json
import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ECR repository naming rules
_REPOSITORY_NAME = re.compile(r"^(?:[a-z0-9]+(?:[._-][a-z0-9]+)*/)*[a-z0-9]+(?:[._-][a-z0-9]+)*$")


class DeletionPolicy(StrEnum):
    DESTROY = "destroy"
    RETAIN = "retain"


class RegistrySpec(BaseModel):
    """A single versioned image store with one retention rule."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    repository_name: str = "container-api-env"
    scan_on_push: bool = True
    max_untagged_age_days: int = Field(default=7, ge=1)
    deletion_policy: DeletionPolicy = DeletionPolicy.DESTROY

    @field_validator("repository_name")
    @classmethod
    def _valid_repository_name(cls, value: str) -> str:
        if not 2 <= len(value) <= 256 or not _REPOSITORY_NAME.match(value):
            raise ValueError(f"invalid ECR repository name {value!r}")
        return value


def lifecycle_policy(spec: RegistrySpec) -> str:
    """Build the ECR lifecycle policy document.

    Exactly one rule: untagged images older than ``max_untagged_age_days``
    expire. Tagged images are never touched.
    """
    return json.dumps(
        {
            "rules": [
                {
                    "rulePriority": 1,
                    "description": (
                        f"Clean up untagged images older than "
                        f"{spec.max_untagged_age_days} days"
                    ),
                    "selection": {
                        "tagStatus": "untagged",
                        "countType": "sinceImagePushed",
                        "countUnit": "days",
                        "countNumber": spec.max_untagged_age_days,
                    },
                    "action": {"type": "expire"},
                }
            ]
        }
    )
