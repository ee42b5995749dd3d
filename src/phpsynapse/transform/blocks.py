"""Block extraction: find php-tagged templates and plan their rewrite.

Given the template

    php`echo date(${format});`

the static segments are ``["echo date(", ");"]``, the handler body is
``echo date($variable0);`` and the rewritten template reads
``php`<identifier>${format}``` — substitutions stay untouched so callers keep
passing the runtime values positionally.
"""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from phpsynapse.hashing import block_identifier
from phpsynapse.models import EmbeddedBlock
from phpsynapse.syntax.parser import Edit, ParsedSource

MARKER_TAG = "php"
MARKER_NEEDLE = f"{MARKER_TAG}`"


def has_marker(code: str) -> bool:
    """Cheap text check: can *code* contain a tagged template at all?"""
    return MARKER_NEEDLE in code


def is_marker_template(node: Node, parsed: ParsedSource) -> bool:
    """True for ``php`...``` where the tag is the bare identifier ``php``."""
    if node.type != "call_expression":
        return False
    tag = node.child_by_field_name("function")
    args = node.child_by_field_name("arguments")
    if tag is None or args is None:
        return False
    return (
        tag.type == "identifier"
        and parsed.text(tag) == MARKER_TAG
        and args.type == "template_string"
    )


def iter_marker_templates(parsed: ParsedSource) -> Iterator[Node]:
    """Yield marker-tagged ``call_expression`` nodes in source order."""
    for node in parsed.walk():
        if is_marker_template(node, parsed):
            yield node


def segment_spans(template: Node) -> list[tuple[int, int]]:
    """Byte spans of the static segments of a ``template_string`` node.

    There is always one more segment than there are substitutions; the spans
    exclude the backticks and the ``${…}`` delimiters.
    """
    spans: list[tuple[int, int]] = []
    start = template.start_byte + 1
    for child in template.children:
        if child.type == "template_substitution":
            spans.append((start, child.start_byte))
            start = child.end_byte
    spans.append((start, template.end_byte - 1))
    return spans


def extract_block(
    node: Node,
    parsed: ParsedSource,
    project_path: str,
    index: int,
) -> tuple[EmbeddedBlock, list[Edit]]:
    """Build the block for the *index*-th marker template and its rewrite edits.

    The first segment is replaced by the identifier, the rest are blanked.
    """
    template = node.child_by_field_name("arguments")
    assert template is not None
    spans = segment_spans(template)

    identifier = block_identifier(project_path, index)
    block = EmbeddedBlock(
        identifier=identifier,
        index=index,
        segments=[parsed.slice(start, end) for start, end in spans],
        start_byte=template.start_byte,
        end_byte=template.end_byte,
    )
    edits = [
        Edit(start, end, identifier if i == 0 else "")
        for i, (start, end) in enumerate(spans)
    ]
    return block, edits
