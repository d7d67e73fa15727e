"""Parser API for strict markup parsing.

Level 1 is a set of module functions (:func:`tokenize`, :func:`build_tree`,
:func:`parse`, :func:`parse_file`, :func:`validate`). Level 2 is the
:class:`MarkupParser` class, which adds configuration, correlation IDs and
metrics.
"""

import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from strict_markup_parser.shared import (
    MarkupError,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from strict_markup_parser.tokenization import MarkupTokenizer, Token
from strict_markup_parser.tree import Node, ParseResult, TreeBuilder, measure_depth

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def _preview(html: str) -> str:
    if len(html) > PREVIEW_LENGTH:
        return html[:PREVIEW_LENGTH] + "..."
    return html


class MarkupParser:
    """Configurable, reusable parser.

    Each call works on its own local state, so a single parser may be used
    from several threads.

    Examples:
        >>> parser = MarkupParser()
        >>> [node.tag_name for node in parser.parse('<p>hi</p><br />')]
        ['p', 'br']

        >>> result = parser.validate('<p>')
        >>> result.success
        False
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults to ParserConfig())
            correlation_id: Overrides ``config.correlation_id`` when given
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")

        self._tokenizer = MarkupTokenizer(
            correlation_id=self.correlation_id,
            track_positions=self.config.track_positions,
        )
        self._tree_builder = TreeBuilder(
            correlation_id=self.correlation_id,
            track_positions=self.config.track_positions,
        )

    def tokenize(self, html: str) -> List[Token]:
        """Split markup into tokens, raising TokenizationError on bad input."""
        return self._tokenizer.tokenize(html)

    def build_tree(self, tokens: Iterable[Token]) -> List[Node]:
        """Build nodes from tokens, raising TreeBuildingError on bad structure."""
        return self._tree_builder.build(tokens)

    def parse(self, html: str) -> List[Node]:
        """Parse markup into its top-level nodes.

        Raises:
            TokenizationError: On lexical errors
            TreeBuildingError: On structural errors
        """
        self.logger.info(
            "Starting parse operation",
            extra={"content_length": len(html) if isinstance(html, str) else None},
        )
        try:
            nodes = self.build_tree(self.tokenize(html))
        except MarkupError as e:
            self.logger.warning(
                "Parse operation failed",
                extra={"error_kind": e.kind.name, "error": str(e)},
            )
            raise
        self.logger.info("Parse operation completed", extra={"top_level_nodes": len(nodes)})
        return nodes

    def parse_file(self, file_path: Union[str, Path], encoding: str = "utf-8") -> List[Node]:
        """Read and parse a markup file.

        Raises:
            OSError: If the file cannot be read
            MarkupError: If its content is not valid markup
        """
        path_obj = Path(file_path)
        self.logger.info("Reading markup file", extra={"file_path": str(path_obj)})
        return self.parse(path_obj.read_text(encoding=encoding))

    def parse_with_metrics(self, html: str) -> ParseResult:
        """Parse markup and return nodes together with performance metrics.

        Raises:
            MarkupError: Same failures as :meth:`parse`
        """
        start_time = time.perf_counter()
        tokens = self.tokenize(html)
        nodes = self.build_tree(tokens)
        return self._result(html, start_time, nodes=nodes, token_count=len(tokens))

    def validate(self, html: str) -> ParseResult:
        """Check markup without raising on markup errors.

        Failures are reported through ``success``, ``error`` and an ERROR
        diagnostic instead of an exception.
        """
        start_time = time.perf_counter()
        token_count = 0
        try:
            tokens = self.tokenize(html)
            token_count = len(tokens)
            nodes = self.build_tree(tokens)
        except MarkupError as e:
            self.logger.info(
                "Markup is invalid",
                extra={"error_kind": e.kind.name, "preview": _preview(html)},
            )
            result = self._result(html, start_time, token_count=token_count)
            result.success = False
            result.error = e
            result.diagnostics.append(e.to_diagnostic(self.correlation_id))
            return result
        return self._result(html, start_time, nodes=nodes, token_count=token_count)

    def _result(
        self,
        html: str,
        start_time: float,
        nodes: Optional[List[Node]] = None,
        token_count: int = 0
    ) -> ParseResult:
        result = ParseResult(nodes=nodes or [], correlation_id=self.correlation_id)
        if self.config.collect_metrics:
            result.performance = PerformanceMetrics(
                processing_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
                characters_processed=len(html),
                tokens_generated=token_count,
                nodes_created=result.element_count + result.text_count,
                max_depth=measure_depth(result.nodes),
            )
        return result


def tokenize(html: str) -> List[Token]:
    """Split markup into tokens.

    Examples:
        >>> [token.type.name for token in tokenize('<b>x</b>')]
        ['OPENING_TAG', 'TEXT', 'CLOSING_TAG']

    Raises:
        TokenizationError: On the first lexical violation
    """
    return MarkupTokenizer().tokenize(html)


def build_tree(tokens: Iterable[Token]) -> List[Node]:
    """Build the node tree for a token sequence.

    Raises:
        TreeBuildingError: On an unmatched closing tag or unclosed element
    """
    return TreeBuilder().build(tokens)


def parse(html: str) -> List[Node]:
    """Parse markup into its top-level nodes; same as ``build_tree(tokenize(html))``.

    Examples:
        >>> nodes = parse('<div id="main">text <img src="a.jpg" /></div>')
        >>> nodes[0].tag_name, nodes[0].attributes
        ('div', {'id': 'main'})
        >>> [type(child).__name__ for child in nodes[0].children]
        ['TextNode', 'ElementNode']
    """
    return build_tree(tokenize(html))


def parse_file(file_path: Union[str, Path], encoding: str = "utf-8") -> List[Node]:
    """Read a file and parse its content."""
    return MarkupParser().parse_file(file_path, encoding=encoding)


def validate(html: str, correlation_id: Optional[str] = None) -> ParseResult:
    """Parse markup and report failure in the result instead of raising."""
    return MarkupParser(correlation_id=correlation_id).validate(html)
