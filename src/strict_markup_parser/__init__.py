"""Strict Markup Parser.

A strict lexer and tree builder for a restricted, XML-like markup. Input is
either accepted exactly or rejected with a descriptive error; nothing is
repaired.

Progressive API Disclosure:
- Level 1: Simple functions - tokenize(), build_tree(), parse(), validate()
- Level 2: Configured parser - MarkupParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Strict Markup Parser Team"

from .api import MarkupParser, build_tree, parse, parse_file, tokenize, validate
from .shared.config import ParserConfig
from .shared.errors import ErrorKind, MarkupError, TokenizationError, TreeBuildingError
from .tokenization import (
    ClosingTagToken,
    OpeningTagToken,
    SelfClosingTagToken,
    TextToken,
    Token,
    TokenType,
)
from .tree import ElementNode, Node, NodeType, ParseResult, TextNode, to_markup

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "tokenize",
    "build_tree",
    "parse",
    "parse_file",
    "validate",
    "to_markup",

    # Level 2: Configured parser
    "MarkupParser",
    "ParserConfig",

    # Tokens
    "Token",
    "TokenType",
    "TextToken",
    "OpeningTagToken",
    "ClosingTagToken",
    "SelfClosingTagToken",

    # Nodes and results
    "Node",
    "NodeType",
    "ElementNode",
    "TextNode",
    "ParseResult",

    # Errors
    "ErrorKind",
    "MarkupError",
    "TokenizationError",
    "TreeBuildingError",
]
