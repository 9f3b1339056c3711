"""Operation descriptors for the compute v2 API.

An :class:`Operation` says which HTTP method and path template an operation
uses and how caller options map onto the wire: into the path, the query
string or the JSON body. Operations are frozen; nothing mutates them while a
request or an enumeration is in flight.
"""

from __future__ import annotations

import string
from collections.abc import Mapping
from typing import Any, Literal, NamedTuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from compute_cli.client.errors import ValidationError

Location = Literal["url", "query", "json"]


class Param(BaseModel):
    """One accepted option of an operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    sent_as: str | None = None
    location: Location = "json"
    required: bool = False

    @property
    def wire_name(self) -> str:
        return self.sent_as or self.name


class PreparedRequest(NamedTuple):
    method: str
    path: str
    params: dict[str, Any]
    json: Any


class Operation(BaseModel):
    """Immutable descriptor of a single API operation."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    params: tuple[Param, ...] = ()
    json_key: str | None = None
    #: Reject options that are not in ``params``
    strict: bool = False

    def param(self, name: str) -> Param | None:
        return next((p for p in self.params if p.name == name), None)

    @property
    def url_params(self) -> tuple[str, ...]:
        return tuple(
            field for _, field, _, _ in string.Formatter().parse(self.path) if field
        )

    def validate_options(self, options: Mapping[str, Any]) -> None:
        if self.strict:
            unknown = sorted(k for k in options if self.param(k) is None)
            if unknown:
                raise ValidationError(
                    f"{', '.join(unknown)} not permitted for "
                    f"{self.method} {self.path}"
                )
        missing = [
            p.name for p in self.params
            if p.required and options.get(p.name) is None
        ]
        missing += [
            name for name in self.url_params
            if options.get(name) is None and name not in missing
        ]
        if missing:
            raise ValidationError(
                f"Missing required option(s): {', '.join(missing)}"
            )

    def prepare(self, options: Mapping[str, Any] | None = None) -> PreparedRequest:
        """Validate ``options`` and split them into path, query and body."""
        options = dict(options or {})
        self.validate_options(options)
        url_values: dict[str, Any] = {}
        query: dict[str, Any] = {}
        body: dict[str, Any] = {}
        for key, value in options.items():
            if value is None:
                continue
            param = self.param(key)
            if key in self.url_params:
                # A single path segment, whatever characters the value holds
                url_values[key] = quote(str(value), safe="")
            elif param is None:
                # Filters the descriptor does not know about go out verbatim
                query[key] = value
            elif param.location == "query":
                query[param.wire_name] = value
            else:
                body[param.wire_name] = value
        path = self.path.format(**url_values)
        json: Any = None
        if body:
            json = {self.json_key: body} if self.json_key else body
        elif self.json_key and self.method in ("POST", "PUT"):
            json = {self.json_key: None}
        return PreparedRequest(self.method, path, query, json)


def _query(*names: str, **renamed: str) -> tuple[Param, ...]:
    params = [Param(name=n, location="query") for n in names]
    params += [
        Param(name=n, sent_as=wire, location="query") for n, wire in renamed.items()
    ]
    return tuple(params)


_SERVER_FILTERS = _query(
    "image", "flavor", "name", "status", "host", "limit", "marker",
    "all_tenants", "reservation_id", "ip", "ip6", "sort_key", "sort_dir",
    changes_since="changes-since",
)

_FLAVOR_FILTERS = _query(
    "limit", "marker", "is_public", "sort_key", "sort_dir",
    min_disk="minDisk", min_ram="minRam",
)

_IMAGE_FILTERS = _query(
    "server", "name", "status", "type", "limit", "marker",
    changes_since="changes-since", min_disk="minDisk", min_ram="minRam",
)

_HYPERVISOR_FILTERS = _query(
    "limit", "marker", "hypervisor_hostname_pattern", "with_servers",
)


class ComputeApi:
    """Supplies the operation descriptors the compute service uses."""

    get_servers = Operation(method="GET", path="/servers", params=_SERVER_FILTERS)
    get_servers_detail = Operation(
        method="GET", path="/servers/detail", params=_SERVER_FILTERS,
    )
    get_server = Operation(method="GET", path="/servers/{id}")
    delete_server = Operation(method="DELETE", path="/servers/{id}")
    post_server = Operation(
        method="POST",
        path="/servers",
        json_key="server",
        strict=True,
        params=(
            Param(name="name", required=True),
            Param(name="image_id", sent_as="imageRef"),
            Param(name="flavor_id", sent_as="flavorRef", required=True),
            Param(name="networks"),
            Param(name="metadata"),
            Param(name="security_groups"),
            Param(name="user_data"),
            Param(name="availability_zone"),
            Param(name="key_name"),
            Param(name="admin_pass", sent_as="adminPass"),
            Param(name="config_drive"),
            Param(name="block_device_mapping", sent_as="block_device_mapping_v2"),
            Param(name="personality"),
        ),
    )
    reboot_server = Operation(
        method="POST",
        path="/servers/{id}/action",
        json_key="reboot",
        strict=True,
        params=(
            Param(name="id", location="url"),
            Param(name="type", required=True),
        ),
    )
    start_server = Operation(
        method="POST", path="/servers/{id}/action", json_key="os-start",
    )
    stop_server = Operation(
        method="POST", path="/servers/{id}/action", json_key="os-stop",
    )

    get_flavors = Operation(method="GET", path="/flavors", params=_FLAVOR_FILTERS)
    get_flavors_detail = Operation(
        method="GET", path="/flavors/detail", params=_FLAVOR_FILTERS,
    )
    get_flavor = Operation(method="GET", path="/flavors/{id}")
    delete_flavor = Operation(method="DELETE", path="/flavors/{id}")
    post_flavors = Operation(
        method="POST",
        path="/flavors",
        json_key="flavor",
        strict=True,
        params=(
            Param(name="name", required=True),
            Param(name="ram", required=True),
            Param(name="vcpus", required=True),
            Param(name="disk", required=True),
            Param(name="id"),
            Param(name="swap"),
            Param(name="rxtx_factor"),
            Param(name="ephemeral", sent_as="OS-FLV-EXT-DATA:ephemeral"),
            Param(name="is_public", sent_as="os-flavor-access:is_public"),
            Param(name="description"),
        ),
    )

    get_images = Operation(method="GET", path="/images", params=_IMAGE_FILTERS)
    get_images_detail = Operation(
        method="GET", path="/images/detail", params=_IMAGE_FILTERS,
    )
    get_image = Operation(method="GET", path="/images/{id}")

    get_keypairs = Operation(
        method="GET",
        path="/os-keypairs",
        params=_query("user_id", "limit", "marker"),
    )
    get_keypair = Operation(method="GET", path="/os-keypairs/{name}")
    delete_keypair = Operation(method="DELETE", path="/os-keypairs/{name}")
    post_keypair = Operation(
        method="POST",
        path="/os-keypairs",
        json_key="keypair",
        strict=True,
        params=(
            Param(name="name", required=True),
            Param(name="public_key"),
            Param(name="type"),
            Param(name="user_id"),
        ),
    )

    get_limits = Operation(
        method="GET", path="/limits", params=_query("tenant_id", "reserved"),
    )

    get_hypervisors = Operation(
        method="GET", path="/os-hypervisors", params=_HYPERVISOR_FILTERS,
    )
    get_hypervisors_detail = Operation(
        method="GET", path="/os-hypervisors/detail", params=_HYPERVISOR_FILTERS,
    )
    get_hypervisor_statistics = Operation(
        method="GET", path="/os-hypervisors/statistics",
    )
