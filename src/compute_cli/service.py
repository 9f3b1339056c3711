"""Compute v2 service: the entry point for working with compute resources."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from compute_cli.api.definitions import ComputeApi
from compute_cli.client.enumerator import Enumerator, RecordMapper
from compute_cli.client.http import ComputeClient
from compute_cli.models import (
    ComputeResource,
    Flavor,
    Hypervisor,
    HypervisorStatistic,
    Image,
    Keypair,
    Limit,
    Server,
)

R = TypeVar("R", bound=ComputeResource)


class ComputeService:
    """Factory for compute resources bound to one client.

    ``list_*`` methods return an :class:`Enumerator`: nothing is requested
    until it is iterated, and every call starts again from the first page.
    ``get_*`` methods (other than limits and statistics) build a detached
    resource from the given options without calling the API; call
    ``retrieve()`` on it to load the remote state.
    """

    def __init__(self, client: ComputeClient, api: ComputeApi | None = None) -> None:
        self.client = client
        self.api = api or ComputeApi()

    def model(self, cls: type[R], data: Mapping[str, Any] | None = None) -> R:
        resource = cls().bind(self.client, self.api)
        if data:
            resource.populate_from_array(data)
        return resource

    def create_server(self, options: Mapping[str, Any]) -> Server:
        """Boot a new server on a host chosen by the compute service."""
        return self.model(Server).create(options)

    def list_servers(
        self,
        detailed: bool = False,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
    ) -> Enumerator[Server]:
        """List servers.

        Without ``detailed`` only the id, name and links of each server are
        returned.
        """
        operation = self.api.get_servers_detail if detailed else self.api.get_servers
        return self.model(Server).enumerate(operation, options, map_fn)

    def get_server(self, options: Mapping[str, Any] | None = None) -> Server:
        return self.model(Server, options)

    def list_flavors(
        self,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
        detailed: bool = False,
    ) -> Enumerator[Flavor]:
        operation = self.api.get_flavors_detail if detailed else self.api.get_flavors
        return self.model(Flavor).enumerate(operation, options, map_fn)

    def get_flavor(self, options: Mapping[str, Any] | None = None) -> Flavor:
        return self.model(Flavor, options)

    def create_flavor(self, options: Mapping[str, Any]) -> Flavor:
        return self.model(Flavor).create(options)

    def list_images(
        self,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
        detailed: bool = False,
    ) -> Enumerator[Image]:
        operation = self.api.get_images_detail if detailed else self.api.get_images
        return self.model(Image).enumerate(operation, options, map_fn)

    def get_image(self, options: Mapping[str, Any] | None = None) -> Image:
        return self.model(Image, options)

    def list_keypairs(
        self,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
    ) -> Enumerator[Keypair]:
        return self.model(Keypair).enumerate(self.api.get_keypairs, options, map_fn)

    def create_keypair(self, options: Mapping[str, Any]) -> Keypair:
        """Create a keypair, or import one when ``public_key`` is given."""
        return self.model(Keypair).create(options)

    def get_keypair(self, options: Mapping[str, Any] | None = None) -> Keypair:
        return self.model(Keypair, options)

    def get_limits(self) -> Limit:
        """Rate and absolute limits for the current project."""
        limits = self.model(Limit)
        return limits.populate_from_response(limits.execute(self.api.get_limits))

    def get_hypervisor_statistics(self) -> HypervisorStatistic:
        """Summary statistics over all hypervisors of all compute nodes."""
        statistics = self.model(HypervisorStatistic)
        return statistics.populate_from_response(
            statistics.execute(self.api.get_hypervisor_statistics)
        )

    def list_hypervisors(
        self,
        detailed: bool = False,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
    ) -> Enumerator[Hypervisor]:
        operation = (
            self.api.get_hypervisors_detail if detailed else self.api.get_hypervisors
        )
        return self.model(Hypervisor).enumerate(operation, options, map_fn)
