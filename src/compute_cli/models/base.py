"""Base class shared by all compute resources.

A resource starts out *detached*: built locally, holding whatever the caller
put into it. It becomes *populated* once a server response has been written
into it. Both paths go through the same field table, built from the pydantic
fields of each resource class: a key is recognised when it matches a field
name or the field's wire alias (``OS-EXT-STS:task_state``). Anything else is
dropped.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from compute_cli.api.definitions import ComputeApi, Operation
from compute_cli.client.errors import ConfigurationError, MalformedResponseError
from compute_cli.models.common import Link

if TYPE_CHECKING:
    from compute_cli.client.enumerator import Enumerator, RecordMapper
    from compute_cli.client.http import ComputeClient

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="ComputeResource")

UnknownKeyHook = Callable[["ComputeResource", str, Any], None]


@functools.lru_cache(maxsize=None)
def field_table(cls: type[ComputeResource]) -> dict[str, str]:
    """Map every recognised key (name or wire alias) to its field name."""
    table: dict[str, str] = {}
    for name, info in cls.model_fields.items():
        table[name] = name
        if info.alias:
            table[info.alias] = name
    return table


class ComputeResource(BaseModel):
    """A typed client-side handle on a remote compute entity."""

    model_config = ConfigDict(
        populate_by_name=True, validate_assignment=True, extra="ignore",
    )

    #: Envelope key of a single entity, e.g. ``server``
    resource_key: ClassVar[str] = ""
    #: Collection key of a listing, e.g. ``servers``
    resources_key: ClassVar[str] = ""
    #: Key of the listing links, defaults to ``<resources_key>_links``
    links_key: ClassVar[str | None] = None
    #: Field holding the value that identifies the entity in URLs
    identifier_field: ClassVar[str] = "id"
    #: Called with (resource, key, value) for every dropped key
    on_unknown_key: ClassVar[UnknownKeyHook | None] = None

    _client: ComputeClient | None = PrivateAttr(default=None)
    _api: ComputeApi = PrivateAttr(default_factory=ComputeApi)
    _populated: bool = PrivateAttr(default=False)

    links: list[Link] = Field(default_factory=list)

    @classmethod
    def list_links_key(cls) -> str:
        return cls.links_key or f"{cls.resources_key}_links"

    def bind(self: R, client: ComputeClient | None, api: ComputeApi | None = None) -> R:
        """Attach the client (and API definitions) used for remote calls."""
        self._client = client
        if api is not None:
            self._api = api
        return self

    @property
    def is_populated(self) -> bool:
        return self._populated

    @property
    def identifier(self) -> Any:
        return getattr(self, self.identifier_field)

    def _assign(self, data: Mapping[str, Any]) -> None:
        table = field_table(type(self))
        hook = type(self).on_unknown_key
        updates: dict[str, Any] = {}
        for key, value in data.items():
            name = table.get(key)
            if name is None:
                logger.debug("%s: dropping unrecognised key %r",
                             type(self).__name__, key)
                if hook is not None:
                    hook(self, key, value)
                continue
            updates[name] = value
        # Nothing is written unless every value validates
        checked = type(self).model_validate(updates)
        for name in updates:
            setattr(self, name, getattr(checked, name))

    def populate_from_array(self: R, options: Mapping[str, Any]) -> R:
        """Set recognised attributes from ``options`` without any I/O."""
        self._assign(options)
        return self

    def populate_from_response(self: R, body: Any) -> R:
        """Set attributes from a parsed response body.

        The entity may sit under ``resource_key``, as in ``{"server": {...}}``.
        """
        if not isinstance(body, Mapping):
            raise MalformedResponseError(
                f"Expected a JSON object for {type(self).__name__}, "
                f"got {type(body).__name__}"
            )
        inner = body.get(self.resource_key) if self.resource_key else None
        if isinstance(inner, Mapping):
            body = inner
        try:
            self._assign(body)
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                f"Malformed {type(self).__name__} in response: {exc}"
            ) from exc
        self._populated = True
        return self

    def spawn(self: R) -> R:
        """Return a fresh detached resource of the same type and binding."""
        return type(self)().bind(self._client, self._api)

    def enumerate(
        self: R,
        operation: Operation,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
    ) -> Enumerator[R]:
        """Lazily list resources of this type across all pages."""
        from compute_cli.client.enumerator import Enumerator

        return Enumerator(
            self._require_client(),
            operation,
            factory=self.spawn,
            items_key=self.resources_key,
            links_key=self.list_links_key(),
            options=options,
            map_fn=map_fn,
        )

    def _require_client(self) -> ComputeClient:
        if self._client is None:
            raise ConfigurationError(
                f"{type(self).__name__} is not bound to a compute client"
            )
        return self._client

    def execute(
        self, operation: Operation, options: Mapping[str, Any] | None = None,
    ) -> Any:
        return self._require_client().execute(operation, options)

    def _create(self: R, operation: Operation, options: Mapping[str, Any]) -> R:
        return self.populate_from_response(self.execute(operation, options))

    def _identity(self) -> dict[str, Any]:
        if self.identifier is None:
            raise ConfigurationError(
                f"{type(self).__name__} has no {self.identifier_field} set"
            )
        return {self.identifier_field: self.identifier}

    def _retrieve(self: R, operation: Operation) -> R:
        return self.populate_from_response(self.execute(operation, self._identity()))

    def _delete(self, operation: Operation) -> None:
        self.execute(operation, self._identity())
