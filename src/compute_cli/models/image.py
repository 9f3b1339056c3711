"""Image data model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from compute_cli.models.base import ComputeResource


class Image(ComputeResource):
    """An image, as exposed through the compute API's image proxy."""

    resource_key = "image"
    resources_key = "images"

    id: str | None = None
    name: str | None = None
    status: str | None = None
    created: str | None = None
    updated: str | None = None
    min_disk: int | None = Field(default=None, alias="minDisk")
    min_ram: int | None = Field(default=None, alias="minRam")
    progress: int | None = None
    size: int | None = Field(default=None, alias="OS-EXT-IMG-SIZE:size")
    metadata: dict[str, Any] | None = None
    server: dict[str, Any] | None = None

    def retrieve(self) -> Image:
        return self._retrieve(self._api.get_image)
