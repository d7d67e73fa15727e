"""Tokenization layer for strict markup parsing.

This module converts markup strings into a flat token sequence using a
single-pass scanner that rejects anything outside the supported grammar.

Key Components:
    MarkupTokenizer: Scanner producing tokens from a markup string
    Token: Union of the four token classes
    TokenType: Enumeration of token kinds
    ScanCursor: Per-call scan state threaded through the scanner
"""

from strict_markup_parser.shared import TokenPosition

from .tokenizer import (
    ClosingTagToken,
    MarkupTokenizer,
    OpeningTagToken,
    ScanCursor,
    SelfClosingTagToken,
    TextToken,
    Token,
    TokenType,
)

__all__ = [
    "ClosingTagToken",
    "MarkupTokenizer",
    "OpeningTagToken",
    "ScanCursor",
    "SelfClosingTagToken",
    "TextToken",
    "Token",
    "TokenPosition",
    "TokenType",
]
