"""Limits command: show project quotas and usage."""

from __future__ import annotations

import typer

from compute_cli.client.errors import error_handler
from compute_cli.commands._common import (
    CloudOpt,
    FormatOpt,
    TokenOpt,
    UrlOpt,
    compute_service,
)
from compute_cli.output.formatter import output

app = typer.Typer(name="limits", help="Show project limits.")


@app.command()
@error_handler
def show(
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show absolute limits and current usage."""
    with compute_service(cloud, url, token) as service:
        limits = service.get_limits()
        if fmt != "table":
            output(limits, fmt)
            return
        a = limits.absolute
        columns = ["Resource", "Used", "Limit"]
        rows = [
            ["Cores", a.total_cores_used, a.total_cores],
            ["RAM (MiB)", a.total_ram_used, a.total_ram],
            ["Instances", a.instances_used, a.instances],
            ["Server groups", a.server_groups_used, a.server_groups],
        ]
        output(limits, fmt, columns=columns, rows=rows, title="Absolute Limits")
