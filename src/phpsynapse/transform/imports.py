"""Static import graph construction.

Only ``import … from '<specifier>'`` statements are read. Relative specifiers
are resolved against the importing file's directory; when the result has no
extension the candidates below are probed in order and the first existing file
wins. Bare specifiers (``vue``, ``@scope/pkg``) are kept verbatim.
"""

from __future__ import annotations

import os
from pathlib import Path

from tree_sitter import Node

from phpsynapse.syntax.parser import ParsedSource

PROBE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")

ImportTarget = Path | str


def _is_type_only(statement: Node) -> bool:
    # `import type { X } from './x'` is erased by the TypeScript compiler.
    return any(child.type == "type" for child in statement.children)


def _specifier(statement: Node, parsed: ParsedSource) -> str | None:
    source = statement.child_by_field_name("source")
    if source is None or source.type != "string":
        return None
    return parsed.text(source)[1:-1]


def import_specifiers(parsed: ParsedSource) -> list[str]:
    """Module specifiers of the file's top-level static imports, in order."""
    specifiers: list[str] = []
    for statement in parsed.root.named_children:
        if statement.type != "import_statement" or _is_type_only(statement):
            continue
        specifier = _specifier(statement, parsed)
        if specifier is not None:
            specifiers.append(specifier)
    return specifiers


def resolve_specifier(specifier: str, importer: Path) -> ImportTarget:
    """Resolve *specifier* as imported from *importer* (an absolute path)."""
    if not specifier.startswith("."):
        return specifier

    resolved = Path(os.path.normpath(os.path.join(importer.parent, specifier)))
    if resolved.suffix:
        return resolved

    for ext in PROBE_EXTENSIONS:
        candidate = resolved.with_name(resolved.name + ext)
        if candidate.exists():
            return candidate
    return resolved


def collect_imports(parsed: ParsedSource, importer: Path) -> list[ImportTarget]:
    """Resolved import targets of *importer*, duplicates removed, order kept."""
    targets: list[ImportTarget] = []
    for specifier in import_specifiers(parsed):
        target = resolve_specifier(specifier, importer)
        if target not in targets:
            targets.append(target)
    return targets
