"""Command-line interface for Strict Markup Parser.

This module provides the ``strict-markup`` tool for parsing, tokenizing,
validating and reformatting markup files.
"""

from .main import main

__all__ = ["main"]
