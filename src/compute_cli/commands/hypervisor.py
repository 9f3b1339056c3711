"""Hypervisor commands: list, stats."""

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

app = typer.Typer(name="hypervisor", help="Inspect hypervisors (admin).")


@app.command("list")
@error_handler
def list_hypervisors(
    detail: DetailOpt = False,
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", help="Filter by hypervisor hostname pattern"),
    ] = None,
    limit: LimitOpt = None,
    max_items: MaxItemsOpt = None,
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List hypervisors."""
    with compute_service(cloud, url, token) as service:
        options = list_options(hypervisor_hostname_pattern=pattern, limit=limit)
        hypervisors = take(service.list_hypervisors(detail, options), max_items)
        columns = ["ID", "Hostname", "Type", "State", "Status", "VMs"]
        rows = [
            [h.id, h.hypervisor_hostname, h.hypervisor_type, h.state,
             h.status, h.running_vms]
            for h in hypervisors
        ]
        output(hypervisors, fmt, columns=columns, rows=rows, title="Hypervisors")


@app.command()
@error_handler
def stats(
    cloud: CloudOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show summary statistics over all hypervisors."""
    with compute_service(cloud, url, token) as service:
        statistics = service.get_hypervisor_statistics()
        output(statistics, fmt, kv=True, title="Hypervisor Statistics")
