"""Root Typer app: global options and command group registration."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from compute_cli import __version__
from compute_cli.commands import (
    config_cmd,
    flavor,
    hypervisor,
    image,
    keypair,
    limits,
    server,
)

app = typer.Typer(
    name="compute-cli",
    help="CLI for the OpenStack Compute v2 API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"compute-cli {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich."""
    package_logger = logging.getLogger("compute_cli")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every request and page fetched."
    ),
) -> None:
    """Compute CLI: manage servers, flavors, images, keypairs, and more."""
    configure_logging(verbose)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(server.app, name="server")
app.add_typer(flavor.app, name="flavor")
app.add_typer(image.app, name="image")
app.add_typer(keypair.app, name="keypair")
app.add_typer(limits.app, name="limits")
app.add_typer(hypervisor.app, name="hypervisor")


def main() -> None:
    app()
