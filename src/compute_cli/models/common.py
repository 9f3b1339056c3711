"""Common response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from compute_cli.client.errors import MalformedResponseError


class Link(BaseModel):
    """A hyperlink attached to a resource or a listing."""

    model_config = ConfigDict(extra="ignore")

    rel: str
    href: str
    type: str | None = None


class Page(BaseModel):
    """One listing response: the raw records plus pagination links.

    Format: ``{"servers": [...], "servers_links": [{"rel": "next", "href": ...}]}``
    """

    items: list[dict[str, Any]]
    links: list[Link] = []

    @property
    def next_link(self) -> str | None:
        return next((link.href for link in self.links if link.rel == "next"), None)

    @classmethod
    def from_body(cls, body: Any, items_key: str, links_key: str) -> Page:
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"Expected a JSON object holding '{items_key}', got {type(body).__name__}"
            )
        if items_key not in body:
            raise MalformedResponseError(f"Response has no '{items_key}' list")
        try:
            return cls(items=body[items_key], links=body.get(links_key) or [])
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                f"Malformed '{items_key}' listing: {exc}"
            ) from exc
