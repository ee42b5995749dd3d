"""Setup-export classification.

A block is the file's *setup* when the nearest enclosing export is one of

    export const setup = php`...`;
    export function setup() { return php`...`; }

The check is purely syntactic: the parent chain of the template is walked
outward and only the first ``export_statement`` met is inspected. A template in
an unexported helper that ``setup`` happens to call does not count.
"""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from phpsynapse.syntax.parser import ParsedSource

SETUP_NAME = "setup"

_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}


def ancestors(node: Node) -> Iterator[Node]:
    """Yield the parents of *node*, nearest first."""
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def nearest_export(node: Node) -> Node | None:
    for ancestor in ancestors(node):
        if ancestor.type == "export_statement":
            return ancestor
    return None


def is_setup_export(export: Node, parsed: ParsedSource) -> bool:
    """True when *export* is a named export binding exactly ``setup``."""
    if any(child.type == "default" for child in export.children):
        return False

    declaration = export.child_by_field_name("declaration")
    if declaration is None:
        return False

    if declaration.type in _VARIABLE_DECLARATIONS:
        declarators = [c for c in declaration.named_children if c.type == "variable_declarator"]
        if len(declarators) != 1:
            return False
        name = declarators[0].child_by_field_name("name")
        return name is not None and name.type == "identifier" and parsed.text(name) == SETUP_NAME

    if declaration.type in _FUNCTION_DECLARATIONS:
        name = declaration.child_by_field_name("name")
        return name is not None and parsed.text(name) == SETUP_NAME

    return False


def is_inside_setup_export(node: Node, parsed: ParsedSource) -> bool:
    export = nearest_export(node)
    return export is not None and is_setup_export(export, parsed)
