"""Exception types raised by the tokenizer and the tree builder.

Every failure is fatal to the call that raised it. Callers that prefer a
result object over an exception can use :func:`strict_markup_parser.validate`,
which turns a :class:`MarkupError` into a diagnostic.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional

from .position import TokenPosition
from .result import DiagnosticEntry, DiagnosticSeverity


class ErrorKind(Enum):
    """Categories of markup errors."""

    INCOMPLETE_TAG = auto()     # Input ended before a required delimiter
    INVALID_NAME = auto()       # Tag or attribute name outside [a-z][a-z0-9-]*
    ATTRIBUTE_SYNTAX = auto()   # Whitespace, quoting or tag form violations
    STRUCTURE = auto()          # Unmatched closing tag or unclosed element


class MarkupError(ValueError):
    """Base class for all markup errors.

    Attributes:
        kind: Error category
        message: Human-readable description without position
        position: Where the offending construct starts, if known
        details: Extra machine-readable context (tag names and the like)
    """

    component = "markup"

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: Optional[TokenPosition] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.position = position
        self.details = details or {}
        super().__init__(self._format())

    def _format(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at {self.position})"

    def to_diagnostic(self, correlation_id: Optional[str] = None) -> DiagnosticEntry:
        """Convert this error into an ERROR diagnostic entry."""
        details = {"kind": self.kind.name}
        details.update(self.details)
        return DiagnosticEntry(
            severity=DiagnosticSeverity.ERROR,
            message=self.message,
            component=self.component,
            position=self.position.to_dict() if self.position else None,
            details=details,
            correlation_id=correlation_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": self.kind.name,
            "message": self.message,
        }
        if self.position is not None:
            result["position"] = self.position.to_dict()
        if self.details:
            result["details"] = dict(self.details)
        return result


class TokenizationError(MarkupError):
    """Lexical error found while scanning the markup."""

    component = "tokenizer"


class TreeBuildingError(MarkupError):
    """Structural error found while matching opening and closing tags."""

    component = "tree_builder"
