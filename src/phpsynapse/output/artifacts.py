"""PHP handler files, one per extracted block."""

from __future__ import annotations

from pathlib import Path

from phpsynapse.output.writer import write_atomic

HANDLERS_DIR = "handlers"
HANDLER_EXT = ".php"


def php_skeleton(code: str) -> str:
    """Wrap a block body in the ``<?php`` prologue, ending in one newline."""
    return f"\n<?php\n\n{code}\n".strip() + "\n"


def handler_path(root: Path, synapse_path: str, identifier: str) -> Path:
    return root / synapse_path / HANDLERS_DIR / f"{identifier}{HANDLER_EXT}"


def write_handler(root: Path, synapse_path: str, identifier: str, code: str) -> Path:
    """Write the handler for *identifier*, replacing any previous version.

    Raises:
        OSError: If the handlers directory or the file cannot be written.
    """
    path = handler_path(root, synapse_path, identifier)
    write_atomic(path, php_skeleton(code))
    return path


def list_handlers(root: Path, synapse_path: str) -> list[Path]:
    directory = root / synapse_path / HANDLERS_DIR
    if not directory.is_dir():
        return []
    return sorted(directory.glob(f"*{HANDLER_EXT}"))
