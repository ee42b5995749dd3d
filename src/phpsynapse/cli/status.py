"""synapse status — show what the last build produced.

Reads manifest.json and the handlers directory; never runs the pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from phpsynapse.cli.errors import err_config_invalid, err_no_manifest
from phpsynapse.config import ConfigError, SynapseConfig, load_config
from phpsynapse.models import Hierarchy, Manifest
from phpsynapse.output.artifacts import list_handlers
from phpsynapse.output.manifest import load_manifest

console = Console()


def status_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", help="Project root (holds synapse.yaml)."),
    ] = Path("."),
) -> None:
    """Show setups, hierarchy and handler count from the last build."""
    try:
        cfg = load_config(root)
    except ConfigError as exc:
        console.print(err_config_invalid(str(exc)))
        raise typer.Exit(1)

    _show_output_panel(cfg)

    if not cfg.manifest_path.exists():
        console.print(err_no_manifest(str(cfg.manifest_path)))
        return

    manifest = load_manifest(cfg.manifest_path)
    _show_setups(manifest)
    _show_hierarchy(manifest)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _show_output_panel(cfg: SynapseConfig) -> None:
    handlers = list_handlers(cfg.root, cfg.synapse_path)
    lines = [
        f"Root:      [bold]{cfg.root}[/]",
        f"Output:    {cfg.output_dir}",
        f"Handlers:  [bold]{len(handlers)}[/]",
        f"Mode:      {cfg.mode}",
    ]
    console.print(Panel("\n".join(lines), title="[bold]Project[/]", expand=False))


def _show_setups(manifest: Manifest) -> None:
    if not manifest.setups:
        console.print("[dim]No setup exports recorded.[/]")
        return

    table = Table(title="Setups", show_lines=False)
    table.add_column("File")
    table.add_column("Handler", style="cyan")
    for path, identifier in sorted(manifest.setups.items()):
        table.add_row(path, f"{identifier}.php")
    console.print(table)


def _show_hierarchy(manifest: Manifest) -> None:
    if not manifest.hierarchy:
        console.print("[dim]No hierarchy recorded (dev builds do not write one).[/]")
        return

    tree = Tree("[bold]Hierarchy[/]")
    _add_branches(tree, manifest.hierarchy)
    console.print(tree)


def _add_branches(parent: Tree, hierarchy: Hierarchy) -> None:
    for path, children in hierarchy.items():
        branch = parent.add(path)
        if isinstance(children, dict):
            _add_branches(branch, children)
