"""synapse init — write a default synapse.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from phpsynapse.cli.errors import warn_config_exists
from phpsynapse.config import ensure_project_config

console = Console()


def init_cmd(
    project_dir: Annotated[
        Path,
        typer.Argument(help="Directory to initialize. Defaults to current directory."),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing synapse.yaml."),
    ] = False,
) -> None:
    """Create synapse.yaml with the default filters and output path."""
    project_dir = project_dir.resolve()
    project_dir.mkdir(parents=True, exist_ok=True)

    target = project_dir / "synapse.yaml"
    if target.exists() and not force:
        console.print(warn_config_exists(str(target)))
        return

    ensure_project_config(project_dir, force=force)
    console.print(f"  [green]✓[/] {target}")
    console.print("\nNext steps:")
    console.print("  1. Tag PHP in your sources:  php`return auth()->user();`")
    console.print("  2. synapse build             (write handlers + manifest)")
    console.print("  3. synapse status            (inspect the manifest)")
