"""Rich error messages for the synapse CLI.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from phpsynapse.cli.errors import err_parse_failed
    console.print(err_parse_failed(path, line))
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_config_invalid(message: str) -> str:
    """synapse.yaml (or a SYNAPSE_* variable) holds an invalid value."""
    return (
        f"[red]Error:[/] Invalid configuration.\n"
        f"  {message}\n"
        "  Fix synapse.yaml or unset the SYNAPSE_PATH / SYNAPSE_MODE variables."
    )


def err_root_not_found(root: str) -> str:
    """--root does not point at a directory."""
    return (
        f"[red]Error:[/] Project root not found: '{root}'\n"
        "  Pass an existing directory with --root."
    )


def err_parse_failed(path: str, line: int | None = None) -> str:
    """A host source file is not valid JavaScript / TypeScript."""
    where = f" (line {line})" if line is not None else ""
    return (
        f"[red]Error:[/] Cannot parse '{path}'{where}.\n"
        "  Fix the syntax error or exclude the file in synapse.yaml:\n"
        "    exclude: ['<glob-or-re:pattern>']"
    )


def err_not_utf8(path: str, offset: int) -> str:
    """A host source file is not UTF-8 encoded."""
    return (
        f"[red]Error:[/] Cannot decode '{path}' as UTF-8 (byte {offset}).\n"
        "  Re-save the file as UTF-8 or exclude it in synapse.yaml:\n"
        "    exclude: ['<glob-or-re:pattern>']"
    )


def err_read_failed(path: str, reason: str) -> str:
    """A host source file could not be read."""
    return (
        f"[red]Error:[/] Cannot read '{path}': {reason}\n"
        "  Check that the file exists and is readable."
    )


def err_write_failed(path: str, reason: str) -> str:
    """A handler, manifest or rewritten source could not be written."""
    return (
        f"[red]Error:[/] Cannot write '{path}': {reason}\n"
        "  Check that the output directory is writable."
    )


def err_output_path_unsafe(path: str) -> str:
    """--out resolves outside the project."""
    return (
        f"[red]Error:[/] Output path is not allowed: '{path}'\n"
        "  Use a directory inside the project root."
    )


def err_no_manifest(manifest_path: str) -> str:
    """No manifest.json yet."""
    return (
        f"[yellow]No manifest found at[/] '{manifest_path}'.\n"
        "  Run:  synapse build"
    )


def warn_config_exists(path: str) -> str:
    return (
        f"[yellow]⚠[/] {path} already exists — left unchanged.\n"
        "  Run:  synapse init --force  to overwrite it."
    )
