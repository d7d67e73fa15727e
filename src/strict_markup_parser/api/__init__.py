"""Public parsing API."""

from .parser import (
    MarkupParser,
    build_tree,
    parse,
    parse_file,
    tokenize,
    validate,
)

__all__ = [
    "MarkupParser",
    "build_tree",
    "parse",
    "parse_file",
    "tokenize",
    "validate",
]
