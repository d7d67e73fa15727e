"""Source position tracking for tokens, nodes and errors."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class TokenPosition:
    """Position of a character in the source markup.

    ``line`` and ``column`` are 1-based, ``offset`` is the 0-based index into
    the source string.
    """

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"
