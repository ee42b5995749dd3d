"""Entry-point hierarchy of files that carry php blocks.

For every entry point (a file that imports something but is imported by no
tracked file) the import tree is walked and pruned down to the files that
contain a block themselves or lead to one. Keys are POSIX paths relative to
the project root.

Import cycles are cut: a file already on the current descent path is not
entered again.
"""

from __future__ import annotations

import os
from pathlib import Path

from phpsynapse.models import Hierarchy
from phpsynapse.transform.imports import ImportTarget
from phpsynapse.transform.tracking import TrackingState


def project_relative(path: ImportTarget, root: Path) -> str:
    return Path(os.path.relpath(path, root)).as_posix()


def entry_points(state: TrackingState) -> list[Path]:
    imported = {target for targets in state.imports.values() for target in targets}
    return [path for path in state.imports if path not in imported]


def _subtree(
    path: ImportTarget,
    state: TrackingState,
    root: Path,
    trail: frozenset[ImportTarget],
) -> Hierarchy:
    result: Hierarchy = {}
    for target in state.imports.get(path, []):
        if target in trail:
            continue
        if target in state.block_files:
            result[project_relative(target, root)] = _subtree(target, state, root, trail | {target})
        elif target in state.imports:
            children = _subtree(target, state, root, trail | {target})
            if children:
                result[project_relative(target, root)] = children
    return result


def build_hierarchy(state: TrackingState, root: Path) -> Hierarchy:
    """Return the pruned import hierarchy for every entry point."""
    hierarchy: Hierarchy = {}
    for entry in entry_points(state):
        subtree = _subtree(entry, state, root, frozenset([entry]))
        if subtree or entry in state.block_files:
            hierarchy[project_relative(entry, root)] = subtree
    return hierarchy
