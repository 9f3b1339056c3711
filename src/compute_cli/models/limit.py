"""Project limit data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from compute_cli.models.base import ComputeResource


class AbsoluteLimits(BaseModel):
    """Absolute quota limits and current usage for a project."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_cores: int | None = Field(default=None, alias="maxTotalCores")
    total_cores_used: int | None = Field(default=None, alias="totalCoresUsed")
    total_ram: int | None = Field(default=None, alias="maxTotalRAMSize")
    total_ram_used: int | None = Field(default=None, alias="totalRAMUsed")
    instances: int | None = Field(default=None, alias="maxTotalInstances")
    instances_used: int | None = Field(default=None, alias="totalInstancesUsed")
    keypairs: int | None = Field(default=None, alias="maxTotalKeypairs")
    server_meta: int | None = Field(default=None, alias="maxServerMeta")
    server_groups: int | None = Field(default=None, alias="maxServerGroups")
    server_groups_used: int | None = Field(default=None, alias="totalServerGroupsUsed")
    server_group_members: int | None = Field(default=None, alias="maxServerGroupMembers")


class Limit(ComputeResource):
    """Rate and absolute limits of the current project."""

    resource_key = "limits"

    rate: list[dict[str, Any]] = Field(default_factory=list)
    absolute: AbsoluteLimits = Field(default_factory=AbsoluteLimits)
