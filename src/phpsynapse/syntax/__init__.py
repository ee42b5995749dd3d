"""Host-source parsing."""

from phpsynapse.syntax.parser import Edit, ParsedSource, ParseError, language_for, parse_source

__all__ = [
    "Edit",
    "ParsedSource",
    "ParseError",
    "language_for",
    "parse_source",
]
