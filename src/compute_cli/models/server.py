"""Server data model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from compute_cli.models.base import ComputeResource


class Server(ComputeResource):
    """A virtual machine."""

    resource_key = "server"
    resources_key = "servers"

    id: str | None = None
    name: str | None = None
    status: str | None = None
    image: dict[str, Any] | str | None = None
    flavor: dict[str, Any] | None = None
    addresses: dict[str, list[dict[str, Any]]] | None = None
    metadata: dict[str, str] | None = None
    created: str | None = None
    updated: str | None = None
    host_id: str | None = Field(default=None, alias="hostId")
    tenant_id: str | None = None
    user_id: str | None = None
    key_name: str | None = None
    access_ipv4: str | None = Field(default=None, alias="accessIPv4")
    access_ipv6: str | None = Field(default=None, alias="accessIPv6")
    admin_pass: str | None = Field(default=None, alias="adminPass")
    progress: int | None = None
    config_drive: str | bool | None = None
    fault: dict[str, Any] | None = None
    security_groups: list[dict[str, Any]] | None = None
    task_state: str | None = Field(default=None, alias="OS-EXT-STS:task_state")
    vm_state: str | None = Field(default=None, alias="OS-EXT-STS:vm_state")
    power_state: int | None = Field(default=None, alias="OS-EXT-STS:power_state")
    availability_zone: str | None = Field(
        default=None, alias="OS-EXT-AZ:availability_zone",
    )
    host: str | None = Field(default=None, alias="OS-EXT-SRV-ATTR:host")
    attached_volumes: list[dict[str, Any]] | None = Field(
        default=None, alias="os-extended-volumes:volumes_attached",
    )

    def create(self, options: Mapping[str, Any]) -> Server:
        """Boot a new server; see ``ComputeApi.post_server`` for options."""
        return self._create(self._api.post_server, options)

    def retrieve(self) -> Server:
        return self._retrieve(self._api.get_server)

    def delete(self) -> None:
        self._delete(self._api.delete_server)

    def reboot(self, reboot_type: str = "SOFT") -> None:
        self.execute(self._api.reboot_server, {**self._identity(), "type": reboot_type})

    def start(self) -> None:
        self.execute(self._api.start_server, self._identity())

    def stop(self) -> None:
        self.execute(self._api.stop_server, self._identity())
