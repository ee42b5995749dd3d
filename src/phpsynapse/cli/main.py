"""synapse CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from phpsynapse.cli.build import build_cmd
from phpsynapse.cli.init import init_cmd
from phpsynapse.cli.status import status_cmd


def _installed_version() -> str:
    try:
        return importlib.metadata.version("phpsynapse")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"synapse {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="synapse",
    help=(
        "synapse — extract php`…` blocks from JS/TS sources.\n\n"
        "  synapse build   Write PHP handlers and manifest.json.\n"
        "  synapse status  Show the manifest of the last build."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """synapse — extract php`…` blocks from JS/TS sources."""


app.command("init")(init_cmd)
app.command("build")(build_cmd)
app.command("status")(status_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed phpsynapse version."""
    typer.echo(f"synapse {_installed_version()}")


if __name__ == "__main__":
    app()
