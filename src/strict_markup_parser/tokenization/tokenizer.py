"""Strict tokenizer for the restricted markup grammar.

This module converts a markup string into a flat list of tokens in a single
left-to-right scan. The grammar is deliberately narrow:

- tag and attribute names match ``[a-z][a-z0-9-]*``
- attribute values are always double-quoted and never unescaped
- a tag is either ``<name ...>``, ``</name>`` or ``<name ... />``

The first violation raises :class:`TokenizationError`; there is no recovery.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from strict_markup_parser.shared import (
    ErrorKind,
    TokenizationError,
    TokenPosition,
    get_logger,
)

LEFT_ANGLE_BRACKET = "<"
RIGHT_ANGLE_BRACKET = ">"
SLASH = "/"
EQUALS = "="
QUOTE = '"'

TAG_END_CHARACTERS = frozenset(SLASH + RIGHT_ANGLE_BRACKET)
NAME_START_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz")
NAME_CHARACTERS = NAME_START_CHARACTERS | frozenset("0123456789-")
# Same set as the ECMAScript \s class, so \x1c-\x1f and \x85 are excluded.
WHITESPACE_CHARACTERS = frozenset(
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class TokenType(Enum):
    """Token kinds with stable numeric values."""

    TEXT = 1
    OPENING_TAG = 2
    CLOSING_TAG = 3
    SELF_CLOSING_TAG = 4


@dataclass(frozen=True)
class TextToken:
    """Maximal run of characters not containing ``<``."""

    text: str
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def type(self) -> TokenType:
        return TokenType.TEXT

    def to_dict(self) -> Dict[str, Any]:
        return _with_position({"type": self.type.name, "text": self.text}, self.position)


@dataclass(frozen=True)
class OpeningTagToken:
    """``<name ...>``"""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def type(self) -> TokenType:
        return TokenType.OPENING_TAG

    def to_dict(self) -> Dict[str, Any]:
        return _with_position(
            {
                "type": self.type.name,
                "tag_name": self.tag_name,
                "attributes": dict(self.attributes),
            },
            self.position,
        )


@dataclass(frozen=True)
class ClosingTagToken:
    """``</name>``"""

    tag_name: str
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def type(self) -> TokenType:
        return TokenType.CLOSING_TAG

    def to_dict(self) -> Dict[str, Any]:
        return _with_position(
            {"type": self.type.name, "tag_name": self.tag_name}, self.position
        )


@dataclass(frozen=True)
class SelfClosingTagToken:
    """``<name ... />``"""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def type(self) -> TokenType:
        return TokenType.SELF_CLOSING_TAG

    def to_dict(self) -> Dict[str, Any]:
        return _with_position(
            {
                "type": self.type.name,
                "tag_name": self.tag_name,
                "attributes": dict(self.attributes),
            },
            self.position,
        )


Token = Union[TextToken, OpeningTagToken, ClosingTagToken, SelfClosingTagToken]


def _with_position(
    data: Dict[str, Any], position: Optional[TokenPosition]
) -> Dict[str, Any]:
    if position is not None:
        data["position"] = position.to_dict()
    return data


def is_whitespace(char: str) -> bool:
    """Check whether ``char`` counts as whitespace inside a tag."""
    return char in WHITESPACE_CHARACTERS


@dataclass
class ScanCursor:
    """Mutable scan state for one tokenize call.

    The cursor is created per call and handed to every scanning routine, so
    tokenizer instances never hold per-input state.
    """

    source: str
    index: int = 0
    length: int = field(init=False)
    _line_starts: Optional[List[int]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.length = len(self.source)

    def at_end(self) -> bool:
        return self.index >= self.length

    def peek(self) -> str:
        """Return the current character; callers check ``at_end`` first."""
        return self.source[self.index]

    def advance(self, count: int = 1) -> None:
        self.index += count

    def skip_whitespace(self) -> int:
        """Skip whitespace and return how many characters were skipped."""
        start = self.index
        while self.index < self.length and is_whitespace(self.source[self.index]):
            self.index += 1
        return self.index - start

    def position_at(self, offset: int) -> TokenPosition:
        """Translate an offset into a line/column position."""
        if self._line_starts is None:
            starts = [0]
            newline = self.source.find("\n")
            while newline != -1:
                starts.append(newline + 1)
                newline = self.source.find("\n", newline + 1)
            self._line_starts = starts

        offset = min(offset, self.length)
        line_index = bisect_right(self._line_starts, offset) - 1
        return TokenPosition(
            line=line_index + 1,
            column=offset - self._line_starts[line_index] + 1,
            offset=offset,
        )


class MarkupTokenizer:
    """Tokenizer for the strict markup grammar.

    Instances only hold settings and a logger, so one tokenizer can be
    shared between threads.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        track_positions: bool = True
    ) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking requests
            track_positions: Attach a TokenPosition to every emitted token
        """
        self.correlation_id = correlation_id
        self.track_positions = track_positions
        self.logger = get_logger(__name__, correlation_id, "tokenizer")

    def tokenize(self, html: str) -> List[Token]:
        """Split ``html`` into tokens.

        Args:
            html: Markup to scan

        Returns:
            Tokens in document order

        Raises:
            TokenizationError: On the first lexical violation
            TypeError: If ``html`` is not a string
        """
        if not isinstance(html, str):
            raise TypeError(f"Markup must be a string, got {type(html).__name__}")

        self.logger.debug("Tokenization started", extra={"content_length": len(html)})

        cursor = ScanCursor(html)
        tokens: List[Token] = []
        try:
            while not cursor.at_end():
                if cursor.peek() == LEFT_ANGLE_BRACKET:
                    tokens.append(self._scan_tag(cursor))
                else:
                    tokens.append(self._scan_text(cursor))
        except TokenizationError as e:
            self.logger.debug(
                "Tokenization failed",
                extra={"error_kind": e.kind.name, "offset": cursor.index},
            )
            raise

        self.logger.debug("Tokenization completed", extra={"token_count": len(tokens)})
        return tokens

    def _position(self, cursor: ScanCursor, offset: int) -> Optional[TokenPosition]:
        if not self.track_positions:
            return None
        return cursor.position_at(offset)

    def _error(
        self,
        cursor: ScanCursor,
        kind: ErrorKind,
        message: str,
        **details: Any
    ) -> TokenizationError:
        # Error positions are reported even when token positions are off.
        return TokenizationError(
            kind, message, cursor.position_at(cursor.index), details or None
        )

    def _incomplete(self, cursor: ScanCursor, tag_start: int) -> TokenizationError:
        return self._error(
            cursor,
            ErrorKind.INCOMPLETE_TAG,
            "Incomplete tag: input ended before the tag was closed",
            tag_start=tag_start,
        )

    def _scan_text(self, cursor: ScanCursor) -> TextToken:
        start = cursor.index
        end = cursor.source.find(LEFT_ANGLE_BRACKET, start + 1)
        if end == -1:
            end = cursor.length
        cursor.index = end
        return TextToken(cursor.source[start:end], self._position(cursor, start))

    def _scan_tag(self, cursor: ScanCursor) -> Token:
        tag_start = cursor.index
        cursor.advance()

        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        if is_whitespace(cursor.peek()):
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                "Whitespace is not allowed after '<'",
                tag_start=tag_start,
            )

        if cursor.peek() == SLASH:
            cursor.advance()
            return self._scan_closing_tag(cursor, tag_start)
        return self._scan_start_tag(cursor, tag_start)

    def _scan_start_tag(self, cursor: ScanCursor, tag_start: int) -> Token:
        tag_name = self._scan_tag_name(cursor)
        attributes = self._scan_attributes(cursor, tag_start)

        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        self_closing = False
        if cursor.peek() == SLASH:
            cursor.advance()
            self_closing = True

        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        if cursor.peek() != RIGHT_ANGLE_BRACKET:
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                f"Malformed start tag <{tag_name}>: expected '>'",
                tag_name=tag_name,
                tag_start=tag_start,
            )
        cursor.advance()

        position = self._position(cursor, tag_start)
        if self_closing:
            return SelfClosingTagToken(tag_name, attributes, position)
        return OpeningTagToken(tag_name, attributes, position)

    def _scan_closing_tag(self, cursor: ScanCursor, tag_start: int) -> ClosingTagToken:
        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        if is_whitespace(cursor.peek()):
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                "Whitespace is not allowed after '</'",
                tag_start=tag_start,
            )

        tag_name = self._scan_tag_name(cursor)

        if not cursor.at_end() and is_whitespace(cursor.peek()):
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                f"Whitespace is not allowed between '</{tag_name}' and '>'",
                tag_name=tag_name,
                tag_start=tag_start,
            )

        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        if cursor.peek() != RIGHT_ANGLE_BRACKET:
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                f"Malformed closing tag </{tag_name}>: expected '>'",
                tag_name=tag_name,
                tag_start=tag_start,
            )
        cursor.advance()

        return ClosingTagToken(tag_name, self._position(cursor, tag_start))

    def _scan_tag_name(self, cursor: ScanCursor) -> str:
        # At least one character remains here.
        start = cursor.index
        char = cursor.peek()
        if char not in NAME_START_CHARACTERS:
            raise self._error(
                cursor,
                ErrorKind.INVALID_NAME,
                f"Tag name must start with a lowercase letter, found {char!r}",
                character=char,
            )
        cursor.advance()

        while not cursor.at_end():
            char = cursor.peek()
            if is_whitespace(char) or char in TAG_END_CHARACTERS:
                break
            if char not in NAME_CHARACTERS:
                raise self._error(
                    cursor,
                    ErrorKind.INVALID_NAME,
                    f"Invalid character {char!r} in tag name "
                    f"{cursor.source[start:cursor.index]!r}",
                    character=char,
                )
            cursor.advance()

        return cursor.source[start:cursor.index]

    def _scan_attributes(self, cursor: ScanCursor, tag_start: int) -> Dict[str, str]:
        attributes: Dict[str, str] = {}

        while not cursor.at_end() and cursor.peek() not in TAG_END_CHARACTERS:
            if cursor.skip_whitespace() == 0:
                raise self._error(
                    cursor,
                    ErrorKind.ATTRIBUTE_SYNTAX,
                    "Missing whitespace before attribute",
                    tag_start=tag_start,
                )

            if cursor.at_end() or cursor.peek() in TAG_END_CHARACTERS:
                break

            name = self._scan_attribute_name(cursor)
            # A repeated name silently replaces the earlier value.
            attributes[name] = self._scan_attribute_value(cursor, name, tag_start)

        return attributes

    def _scan_attribute_name(self, cursor: ScanCursor) -> str:
        start = cursor.index
        char = cursor.peek()
        if char not in NAME_START_CHARACTERS:
            raise self._error(
                cursor,
                ErrorKind.INVALID_NAME,
                f"Attribute name must start with a lowercase letter, found {char!r}",
                character=char,
            )
        cursor.advance()

        while not cursor.at_end():
            char = cursor.peek()
            if char in NAME_CHARACTERS:
                cursor.advance()
                continue
            if char == EQUALS or is_whitespace(char) or char in TAG_END_CHARACTERS:
                break
            raise self._error(
                cursor,
                ErrorKind.INVALID_NAME,
                f"Invalid character {char!r} in attribute name "
                f"{cursor.source[start:cursor.index]!r}",
                character=char,
            )

        return cursor.source[start:cursor.index]

    def _scan_attribute_value(self, cursor: ScanCursor, name: str, tag_start: int) -> str:
        if cursor.at_end() or cursor.peek() != EQUALS:
            return ""
        cursor.advance()

        if cursor.at_end():
            raise self._incomplete(cursor, tag_start)

        char = cursor.peek()
        if is_whitespace(char) or char in TAG_END_CHARACTERS:
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                f"Missing value for attribute {name!r}",
                attribute=name,
            )
        if char != QUOTE:
            raise self._error(
                cursor,
                ErrorKind.ATTRIBUTE_SYNTAX,
                f"Value of attribute {name!r} must be double-quoted",
                attribute=name,
            )
        cursor.advance()

        start = cursor.index
        end = cursor.source.find(QUOTE, start)
        if end == -1:
            cursor.index = cursor.length
            raise self._incomplete(cursor, tag_start)

        cursor.index = end + 1
        return cursor.source[start:end]
