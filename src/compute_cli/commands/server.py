"""Server commands: list, show, create, delete, reboot."""

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

app = typer.Typer(name="server", help="Manage servers.")
console = Console()


@app.command("list")
@error_handler
def list_servers(
    detail: DetailOpt = False,
    name: Annotated[
        str | None, typer.Option("--name", help="Filter by name (regex)"),
    ] = None,
    status: Annotated[
        str | None, typer.Option("--status", help="Filter by status"),
    ] = None,
    limit: LimitOpt = None,
    max_items: MaxItemsOpt = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List servers, following pagination links."""
    with compute_service(cloud, url, token) as service:
        options = list_options(name=name, status=status, limit=limit)
        servers = take(service.list_servers(detail, options), max_items)
        columns = ["ID", "Name", "Status", "Flavor", "Image"]
        rows = [
            [s.id, s.name, s.status, s.flavor, s.image]
            for s in servers
        ]
        output(servers, fmt, columns=columns, rows=rows, title="Servers")


@app.command()
@error_handler
def show(
    server_id: Annotated[str, typer.Argument(help="Server ID")],
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show server details."""
    with compute_service(cloud, url, token) as service:
        server = service.get_server({"id": server_id}).retrieve()
        output(server, fmt, kv=True, title=f"Server: {server.name or server_id}")


@app.command()
@error_handler
def create(
    name: Annotated[str, typer.Argument(help="Server name")],
    flavor: Annotated[str, typer.Option("--flavor", help="Flavor ID")],
    image: Annotated[
        str | None, typer.Option("--image", help="Image ID"),
    ] = None,
    key_name: Annotated[
        str | None, typer.Option("--key-name", help="Keypair to inject"),
    ] = None,
    network: Annotated[
        list[str] | None, typer.Option("--network", help="Network UUID (repeatable)"),
    ] = None,
    security_group: Annotated[
        list[str] | None,
        typer.Option("--security-group", help="Security group name (repeatable)"),
    ] = None,
    availability_zone: Annotated[
        str | None, typer.Option("--availability-zone", help="Availability zone"),
    ] = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Boot a new server."""
    options = list_options(
        name=name,
        flavor_id=flavor,
        image_id=image,
        key_name=key_name,
        availability_zone=availability_zone,
        networks=[{"uuid": n} for n in network] if network else None,
        security_groups=(
            [{"name": g} for g in security_group] if security_group else None
        ),
    )
    with compute_service(cloud, url, token) as service:
        server = service.create_server(options)
        if fmt == "table":
            console.print(f"[green]Server '{name}' created ({server.id}).[/]")
        output(server, fmt, kv=True, title=f"Server: {name}")


@app.command()
@error_handler
def delete(
    server_id: Annotated[str, typer.Argument(help="Server ID")],
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Delete a server."""
    with compute_service(cloud, url, token) as service:
        service.get_server({"id": server_id}).delete()
        console.print(f"[green]Server '{server_id}' deleted.[/]")


@app.command()
@error_handler
def reboot(
    server_id: Annotated[str, typer.Argument(help="Server ID")],
    hard: Annotated[bool, typer.Option("--hard", help="Hard reboot")] = False,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Reboot a server."""
    with compute_service(cloud, url, token) as service:
        service.get_server({"id": server_id}).reboot("HARD" if hard else "SOFT")
        console.print(f"[green]Server '{server_id}' rebooting.[/]")
