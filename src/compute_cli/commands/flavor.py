"""Flavor commands: list, show, create."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from compute_cli.client.errors import error_handler
from compute_cli.commands._common import (
    CloudOpt,
    DetailOpt,
    FormatOpt,
    LimitOpt,
    MaxItemsOpt,
    TokenOpt,
    UrlOpt,
    compute_service,
    list_options,
    take,
)
from compute_cli.output.formatter import output

app = typer.Typer(name="flavor", help="Manage flavors.")
console = Console()


@app.command("list")
@error_handler
def list_flavors(
    detail: DetailOpt = False,
    min_ram: Annotated[
        int | None, typer.Option("--min-ram", help="Minimum RAM in MiB"),
    ] = None,
    min_disk: Annotated[
        int | None, typer.Option("--min-disk", help="Minimum disk in GiB"),
    ] = None,
    limit: LimitOpt = None,
    max_items: MaxItemsOpt = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List flavors."""
    with compute_service(cloud, url, token) as service:
        options = list_options(min_ram=min_ram, min_disk=min_disk, limit=limit)
        flavors = take(service.list_flavors(options, detailed=detail), max_items)
        columns = ["ID", "Name", "vCPUs", "RAM", "Disk"]
        rows = [[f.id, f.name, f.vcpus, f.ram, f.disk] for f in flavors]
        output(flavors, fmt, columns=columns, rows=rows, title="Flavors")


@app.command()
@error_handler
def show(
    flavor_id: Annotated[str, typer.Argument(help="Flavor ID")],
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show flavor details."""
    with compute_service(cloud, url, token) as service:
        flavor = service.get_flavor({"id": flavor_id}).retrieve()
        output(flavor, fmt, kv=True, title=f"Flavor: {flavor.name or flavor_id}")


@app.command()
@error_handler
def create(
    name: Annotated[str, typer.Argument(help="Flavor name")],
    ram: Annotated[int, typer.Option("--ram", help="RAM in MiB")],
    vcpus: Annotated[int, typer.Option("--vcpus", help="Number of vCPUs")],
    disk: Annotated[int, typer.Option("--disk", help="Root disk in GiB")] = 0,
    flavor_id: Annotated[
        str | None, typer.Option("--id", help="Flavor ID (generated if omitted)"),
    ] = None,
    private: Annotated[
        bool, typer.Option("--private", help="Restrict to granted projects"),
    ] = False,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Create a flavor."""
    options = list_options(
        name=name, ram=ram, vcpus=vcpus, disk=disk, id=flavor_id,
        is_public=False if private else None,
    )
    with compute_service(cloud, url, token) as service:
        flavor = service.create_flavor(options)
        if fmt == "table":
            console.print(f"[green]Flavor '{name}' created ({flavor.id}).[/]")
        output(flavor, fmt, kv=True, title=f"Flavor: {name}")
