"""Flavor data model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from compute_cli.models.base import ComputeResource


class Flavor(ComputeResource):
    """A hardware template for servers."""

    resource_key = "flavor"
    resources_key = "flavors"

    id: str | None = None
    name: str | None = None
    ram: int | None = None
    vcpus: int | None = None
    disk: int | None = None
    swap: int | str | None = None
    rxtx_factor: float | None = None
    description: str | None = None
    ephemeral: int | None = Field(default=None, alias="OS-FLV-EXT-DATA:ephemeral")
    is_disabled: bool | None = Field(default=None, alias="OS-FLV-DISABLED:disabled")
    is_public: bool | None = Field(default=None, alias="os-flavor-access:is_public")
    extra_specs: dict[str, str] | None = None

    def create(self, options: Mapping[str, Any]) -> Flavor:
        return self._create(self._api.post_flavors, options)

    def retrieve(self) -> Flavor:
        return self._retrieve(self._api.get_flavor)

    def delete(self) -> None:
        self._delete(self._api.delete_flavor)
