"""Keypair commands: list, show, create."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from compute_cli.client.errors import error_handler
from compute_cli.commands._common import (
    CloudOpt,
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

app = typer.Typer(name="keypair", help="Manage keypairs.")
console = Console()


@app.command("list")
@error_handler
def list_keypairs(
    limit: LimitOpt = None,
    max_items: MaxItemsOpt = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List keypairs."""
    with compute_service(cloud, url, token) as service:
        keypairs = take(service.list_keypairs(list_options(limit=limit)), max_items)
        columns = ["Name", "Type", "Fingerprint"]
        rows = [[k.name, k.type, k.fingerprint] for k in keypairs]
        output(keypairs, fmt, columns=columns, rows=rows, title="Keypairs")


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Keypair name")],
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show keypair details."""
    with compute_service(cloud, url, token) as service:
        keypair = service.get_keypair({"name": name}).retrieve()
        output(keypair, fmt, kv=True, title=f"Keypair: {name}")


@app.command()
@error_handler
def create(
    name: Annotated[str, typer.Argument(help="Keypair name")],
    public_key: Annotated[
        Path | None,
        typer.Option("--public-key", help="Import this public key file"),
    ] = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Create a keypair, or import an existing public key."""
    options = list_options(
        name=name,
        public_key=public_key.read_text().strip() if public_key else None,
    )
    with compute_service(cloud, url, token) as service:
        keypair = service.create_keypair(options)
        if fmt == "table":
            console.print(f"[green]Keypair '{name}' created.[/]")
            if keypair.private_key:
                console.print(
                    "[yellow]Save the private key now; it cannot be retrieved again.[/]"
                )
        output(keypair, fmt, kv=True, title=f"Keypair: {name}")
