"""Image commands: list, show."""

from __future__ import annotations

from typing import Annotated

import typer

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

app = typer.Typer(name="image", help="Browse images through the compute API.")


@app.command("list")
@error_handler
def list_images(
    detail: DetailOpt = False,
    name: Annotated[str | None, typer.Option("--name", help="Filter by name")] = None,
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
    """List images."""
    with compute_service(cloud, url, token) as service:
        options = list_options(name=name, status=status, limit=limit)
        images = take(service.list_images(options, detailed=detail), max_items)
        columns = ["ID", "Name", "Status", "Min Disk", "Min RAM"]
        rows = [[i.id, i.name, i.status, i.min_disk, i.min_ram] for i in images]
        output(images, fmt, columns=columns, rows=rows, title="Images")


@app.command()
@error_handler
def show(
    image_id: Annotated[str, typer.Argument(help="Image ID")],
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show image details."""
    with compute_service(cloud, url, token) as service:
        image = service.get_image({"id": image_id}).retrieve()
        output(image, fmt, kv=True, title=f"Image: {image.name or image_id}")
