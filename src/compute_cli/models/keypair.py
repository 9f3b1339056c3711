"""Keypair data model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from compute_cli.models.base import ComputeResource


class Keypair(ComputeResource):
    """An SSH (or x509) keypair, identified by name.

    Listings wrap every record in its own ``{"keypair": {...}}`` envelope,
    which population unwraps like any other response envelope.
    """

    resource_key = "keypair"
    resources_key = "keypairs"
    identifier_field = "name"

    id: int | None = None
    name: str | None = None
    fingerprint: str | None = None
    public_key: str | None = None
    private_key: str | None = None
    type: str | None = None
    user_id: str | None = None
    created_at: str | None = None
    deleted: bool | None = None

    def create(self, options: Mapping[str, Any]) -> Keypair:
        """Generate a keypair, or import one when ``public_key`` is given."""
        return self._create(self._api.post_keypair, options)

    def retrieve(self) -> Keypair:
        return self._retrieve(self._api.get_keypair)

    def delete(self) -> None:
        self._delete(self._api.delete_keypair)
