"""Build-session tracking state shared by every transform call."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from phpsynapse.transform.imports import ImportTarget


@dataclass
class TrackingState:
    """Import edges and block membership accumulated across one build.

    ``imports`` maps an importing file to its resolved targets; only files
    with at least one static import appear as keys. ``block_files`` holds the
    files in which at least one php block was extracted.
    """

    imports: dict[Path, list[ImportTarget]] = field(default_factory=dict)
    block_files: set[Path] = field(default_factory=set)

    def reset(self) -> None:
        self.imports.clear()
        self.block_files.clear()

    def record_imports(self, importer: Path, targets: list[ImportTarget]) -> None:
        if targets:
            self.imports[importer] = list(targets)
        else:
            self.imports.pop(importer, None)

    def mark_blocks(self, path: Path, has_blocks: bool) -> None:
        if has_blocks:
            self.block_files.add(path)
        else:
            self.block_files.discard(path)
