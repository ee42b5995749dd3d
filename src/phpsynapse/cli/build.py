"""synapse build — run the pipeline over a project tree.

Every file under --root that passes the include/exclude filter is transformed
in sorted path order:

  batch (default)  handlers written per file, manifest.json written once at
                   the end with setups + hierarchy.
  --dev            handlers written per file, setups merged into
                   manifest.json after each setup-bearing file; no hierarchy.

With --out the rewritten sources are written below that directory, mirroring
the project layout. Without it only handlers and the manifest are produced.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel

from phpsynapse.cli.errors import (
    err_config_invalid,
    err_not_utf8,
    err_output_path_unsafe,
    err_parse_failed,
    err_read_failed,
    err_root_not_found,
    err_write_failed,
)
from phpsynapse.config import MODE_BUILD, MODE_SERVE, ConfigError, SynapseConfig, load_config
from phpsynapse.output.writer import validate_output_dir, write_atomic
from phpsynapse.pipeline import SynapsePipeline
from phpsynapse.syntax.parser import ParseError

console = Console()

_SKIP_DIRS = {".git", "node_modules"}


def build_cmd(
    root: Annotated[
        Path,
        typer.Option("--root", help="Project root (holds synapse.yaml)."),
    ] = Path("."),
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write rewritten sources below this directory."),
    ] = None,
    dev: Annotated[
        bool,
        typer.Option("--dev", help="Incremental mode: merge setups after every file."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List every extracted block."),
    ] = False,
) -> None:
    """Extract php blocks into handlers and write the manifest."""
    if not root.is_dir():
        console.print(err_root_not_found(str(root)))
        raise typer.Exit(1)

    try:
        cfg = load_config(root)
    except ConfigError as exc:
        console.print(err_config_invalid(str(exc)))
        raise typer.Exit(1)
    if dev:
        cfg.mode = MODE_SERVE

    out_dir: Path | None = None
    if out is not None:
        try:
            out_dir = validate_output_dir(out, cfg.root)
        except ValueError:
            console.print(err_output_path_unsafe(str(out)))
            raise typer.Exit(1)

    pipeline = SynapsePipeline(cfg)
    pipeline.build_start()

    files = discover_files(pipeline, skip=out_dir)
    console.print(f"[bold]→ {len(files)} file(s)[/] [dim]({cfg.mode} mode)[/] in {cfg.root}")

    failed = 0
    block_count = 0
    for path in files:
        rel = path.relative_to(cfg.root).as_posix()
        try:
            code = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            console.print(err_not_utf8(rel, exc.start))
            failed += 1
            continue
        except OSError as exc:
            console.print(err_read_failed(rel, exc.strerror or str(exc)))
            raise typer.Exit(1)

        try:
            result = pipeline.transform(code, path)
        except ParseError as exc:
            console.print(err_parse_failed(rel, exc.line))
            failed += 1
            continue
        except OSError as exc:
            console.print(err_write_failed(str(exc.filename or rel), exc.strerror or str(exc)))
            raise typer.Exit(1)

        if result is None:
            continue

        if result.blocks:
            block_count += len(result.blocks)
            setup = " [cyan](setup)[/]" if any(b.is_setup for b in result.blocks) else ""
            console.print(f"  [green]✓[/] {rel} — {len(result.blocks)} block(s){setup}")
            if verbose:
                for block in result.blocks:
                    params = f", {block.parameter_count} param(s)" if block.parameter_count else ""
                    console.print(f"      [dim]{block.identifier}.php{params}[/]")

        if out_dir is not None:
            _write_rewritten(out_dir / rel, result.code)

    if failed:
        console.print(f"\n[red]✗ {failed} file(s) could not be processed — manifest not written.[/]")
        raise typer.Exit(1)

    if cfg.mode == MODE_BUILD:
        try:
            manifest = pipeline.generate_bundle()
        except OSError as exc:
            console.print(err_write_failed(str(cfg.manifest_path), exc.strerror or str(exc)))
            raise typer.Exit(1)
        entries = len(manifest.hierarchy)
    else:
        entries = 0

    console.print(_summary(cfg, len(files), block_count, len(pipeline.manifest.setups), entries))


def discover_files(pipeline: SynapsePipeline, skip: Path | None = None) -> list[Path]:
    """Files below the pipeline root that its filter accepts, sorted."""
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(pipeline.root):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in _SKIP_DIRS and (skip is None or (current / d).resolve() != skip)
        )
        for name in filenames:
            path = current / name
            if pipeline.accepts(path):
                found.append(path)
    return sorted(found)


def _write_rewritten(target: Path, code: str) -> None:
    try:
        write_atomic(target, code)
    except OSError as exc:
        console.print(err_write_failed(str(target), exc.strerror or str(exc)))
        raise typer.Exit(1)


def _summary(cfg: SynapseConfig, files: int, blocks: int, setups: int, entries: int) -> Panel:
    lines = [
        f"Files:     [bold]{files}[/]",
        f"Handlers:  [bold]{blocks}[/]  → {cfg.handlers_dir}",
        f"Setups:    [bold]{setups}[/]",
    ]
    if cfg.mode == MODE_BUILD:
        lines.append(f"Entries:   [bold]{entries}[/]  → {cfg.manifest_path}")
    return Panel("\n".join(lines), title="[bold]synapse build[/]", expand=False)
