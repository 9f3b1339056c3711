"""Config commands: manage cloud profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from compute_cli.client.errors import error_handler
from compute_cli.config.manager import ConfigManager
from compute_cli.config.models import CloudProfile
from compute_cli.output.formatter import output

app = typer.Typer(name="config", help="Manage cloud profiles and CLI configuration.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Compute endpoint URL")],
    token: Annotated[Optional[str], typer.Option("--token", "-t", help="Auth token")] = None,
    microversion: Annotated[
        Optional[str], typer.Option("--microversion", help="Compute API microversion"),
    ] = None,
    timeout: Annotated[float, typer.Option("--timeout", help="Request timeout in seconds")] = 30.0,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add a cloud profile."""
    mgr = _get_manager()
    profile = CloudProfile(
        name=name,
        url=url,
        token=token,
        microversion=microversion,
        timeout=timeout,
        verify_ssl=not no_verify_ssl,
    )
    mgr.add_profile(profile)
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'compute-cli config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    columns = ["Name", "URL", "Microversion", "Default"]
    rows = []
    for name, p in profiles.items():
        is_default = "*" if name == default else ""
        rows.append([name, p.url, p.microversion or "", is_default])

    output(
        {"profiles": [p.model_dump(exclude={"token"}, exclude_none=True) for p in profiles.values()]},
        fmt,
        columns=columns,
        rows=rows,
        title="Cloud Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """Show profile details."""
    mgr = _get_manager()
    profile = mgr.get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    data = profile.model_dump(exclude_none=True)
    if "token" in data:
        data["token"] = data["token"][:8] + "..." if len(data["token"]) > 8 else "***"

    output(data, fmt, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default cloud profile."""
    mgr = _get_manager()
    if mgr.set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Test connectivity by reading the project limits."""
    from compute_cli.client.http import ComputeClient
    from compute_cli.service import ComputeService

    mgr = _get_manager()
    profile = mgr.resolve_cloud(profile_name=name)
    console.print(f"Testing connection to [bold]{profile.url}[/]...")

    with ComputeClient(profile) as client:
        limits = ComputeService(client).get_limits()
        console.print(
            f"[green]Connected![/] Instances in use: "
            f"{limits.absolute.instances_used}/{limits.absolute.instances}"
        )


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove a cloud profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force:
        if not Confirm.ask(f"Remove profile '{name}'?"):
            console.print("Cancelled.")
            return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
