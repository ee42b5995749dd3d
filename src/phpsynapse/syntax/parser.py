"""Tree-sitter parsing of JavaScript / TypeScript host sources.

The grammar is picked from the file extension. Trees are never mutated;
callers describe rewrites as byte-range edits and apply them with
``ParsedSource.apply_edits`` so that every untouched byte, comments and
formatting included, comes back out verbatim.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_parser

_TSX_EXTS = {".tsx"}
_TS_EXTS = {".ts", ".mts", ".cts"}


class ParseError(ValueError):
    """Raised when a host source file cannot be parsed."""

    def __init__(self, path: str, line: int | None = None) -> None:
        self.path = path
        self.line = line
        where = f" near line {line}" if line is not None else ""
        super().__init__(f"Cannot parse '{path}'{where}.")


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` (bytes) with ``text``."""

    start: int
    end: int
    text: str


def language_for(path: str | Path) -> str:
    """Return the tree-sitter language name used for *path*."""
    ext = Path(path).suffix.lower()
    if ext in _TSX_EXTS:
        return "tsx"
    if ext in _TS_EXTS:
        return "typescript"
    return "javascript"


@lru_cache(maxsize=None)
def _parser(language: str) -> Parser:
    return get_parser(language)  # type: ignore[arg-type]


class ParsedSource:
    """A host file's source bytes together with its syntax tree."""

    def __init__(self, path: str, source: bytes, tree: Tree) -> None:
        self.path = path
        self.source = source
        self.tree = tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    def slice(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8")

    def walk(self) -> Iterator[Node]:
        """Yield every node in pre-order, i.e. in source order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def apply_edits(self, edits: list[Edit]) -> str:
        """Return the source text with non-overlapping *edits* applied."""
        out: list[bytes] = []
        pos = 0
        for edit in sorted(edits, key=lambda e: e.start):
            out.append(self.source[pos:edit.start])
            out.append(edit.text.encode("utf-8"))
            pos = edit.end
        out.append(self.source[pos:])
        return b"".join(out).decode("utf-8")


def parse_source(code: str, path: str | Path) -> ParsedSource:
    """Parse *code* with the grammar matching *path*.

    Raises:
        ParseError: If tree-sitter reports a syntax error anywhere in the file.
    """
    source = code.encode("utf-8")
    tree = _parser(language_for(path)).parse(source)
    if tree.root_node.has_error:
        raise ParseError(str(path), _first_error_line(tree.root_node))
    return ParsedSource(str(path), source, tree)


def _first_error_line(root: Node) -> int | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
