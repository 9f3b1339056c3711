"""Hypervisor data models."""

from __future__ import annotations

from typing import Any

from compute_cli.models.base import ComputeResource


class Hypervisor(ComputeResource):
    """A compute node's hypervisor."""

    resource_key = "hypervisor"
    resources_key = "hypervisors"

    # Integer before microversion 2.53, UUID after
    id: int | str | None = None
    hypervisor_hostname: str | None = None
    hypervisor_type: str | None = None
    hypervisor_version: int | None = None
    host_ip: str | None = None
    status: str | None = None
    state: str | None = None
    vcpus: int | None = None
    vcpus_used: int | None = None
    memory_mb: int | None = None
    memory_mb_used: int | None = None
    free_ram_mb: int | None = None
    local_gb: int | None = None
    local_gb_used: int | None = None
    free_disk_gb: int | None = None
    disk_available_least: int | None = None
    running_vms: int | None = None
    current_workload: int | None = None
    cpu_info: dict[str, Any] | str | None = None
    service: dict[str, Any] | None = None
    servers: list[dict[str, Any]] | None = None


class HypervisorStatistic(ComputeResource):
    """Summary statistics over all hypervisors."""

    resource_key = "hypervisor_statistics"

    count: int | None = None
    vcpus: int | None = None
    vcpus_used: int | None = None
    memory_mb: int | None = None
    memory_mb_used: int | None = None
    free_ram_mb: int | None = None
    local_gb: int | None = None
    local_gb_used: int | None = None
    free_disk_gb: int | None = None
    disk_available_least: int | None = None
    running_vms: int | None = None
    current_workload: int | None = None
