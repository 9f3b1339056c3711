"""Shared helpers for CLI commands: client factory, options, listing helpers."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Annotated, Any, TypeVar

import typer

from compute_cli.client.http import ComputeClient
from compute_cli.config.manager import ConfigManager
from compute_cli.service import ComputeService

T = TypeVar("T")

# Shared Typer option type aliases
CloudOpt = Annotated[
    str | None,
    typer.Option("--cloud", "-c", help="Cloud profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help="Compute endpoint override"),
]
TokenOpt = Annotated[
    str | None,
    typer.Option("--token", help="Auth token override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format"),
]
LimitOpt = Annotated[
    int | None,
    typer.Option("--limit", help="Page size requested from the API"),
]
MaxItemsOpt = Annotated[
    int | None,
    typer.Option("--max-items", help="Stop after this many items"),
]
DetailOpt = Annotated[
    bool,
    typer.Option("--detail", "-d", help="Fetch full details for each item"),
]


def make_client(
    cloud: str | None,
    url: str | None,
    token: str | None,
) -> ComputeClient:
    """Create a ComputeClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    profile = mgr.resolve_cloud(profile_name=cloud, url=url, token=token)
    return ComputeClient(profile)


@contextmanager
def compute_service(
    cloud: str | None,
    url: str | None,
    token: str | None,
) -> Iterator[ComputeService]:
    """Yield a ComputeService whose client is closed on exit."""
    with make_client(cloud, url, token) as client:
        yield ComputeService(client)


def take(items: Iterable[T], max_items: int | None) -> list[T]:
    """Consume at most *max_items* from a lazy listing."""
    if max_items is None:
        return list(items)
    return list(itertools.islice(items, max_items))


def list_options(**filters: Any) -> dict[str, Any]:
    """Drop filters the user did not set."""
    return {k: v for k, v in filters.items() if v is not None}
