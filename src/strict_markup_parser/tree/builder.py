"""Tree building for strict markup parsing.

This module turns a token sequence into an ordered list of top-level nodes
with a stack automaton: opening tags descend, closing tags must match the
innermost open element and ascend. Nothing is repaired; the first mismatch
raises :class:`TreeBuildingError`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from strict_markup_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ErrorKind,
    MarkupError,
    PerformanceMetrics,
    TreeBuildingError,
    get_logger,
)
from strict_markup_parser.tokenization import (
    ClosingTagToken,
    OpeningTagToken,
    SelfClosingTagToken,
    TextToken,
    Token,
)

from .nodes import ElementNode, Node, TextNode, iter_nodes, nodes_to_dicts


class TreeBuilder:
    """Builds a node tree from tokens using an explicit open-element stack.

    The builder holds no per-call state, so one instance can serve several
    threads at once.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        track_positions: bool = True
    ) -> None:
        """Initialize the tree builder.

        Args:
            correlation_id: Optional correlation ID for tracking requests
            track_positions: Copy token positions onto the created nodes
        """
        self.correlation_id = correlation_id
        self.track_positions = track_positions
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, tokens: Iterable[Token]) -> List[Node]:
        """Build the document tree.

        Args:
            tokens: Tokens in document order

        Returns:
            Top-level nodes in document order

        Raises:
            TreeBuildingError: On an unmatched closing tag or an unclosed element
            TypeError: If a token is not one of the four token classes
        """
        # The sentinel root is never returned; it only collects top-level
        # siblings and tells us at the end whether everything was closed.
        root = ElementNode(tag_name="")
        current = root
        stack: List[ElementNode] = []
        token_count = 0

        for token in tokens:
            token_count += 1
            position = getattr(token, "position", None) if self.track_positions else None

            if isinstance(token, TextToken):
                current.children.append(TextNode(token.text, position))

            elif isinstance(token, OpeningTagToken):
                element = ElementNode(token.tag_name, dict(token.attributes), [], position)
                current.children.append(element)
                stack.append(current)
                current = element

            elif isinstance(token, SelfClosingTagToken):
                current.children.append(
                    ElementNode(token.tag_name, dict(token.attributes), [], position)
                )

            elif isinstance(token, ClosingTagToken):
                if token.tag_name != current.tag_name:
                    raise self._fail(self._unmatched_closing_tag(token, current, root))
                current = stack.pop()

            else:
                raise TypeError(f"Unsupported token type: {type(token).__name__}")

        if current is not root:
            raise self._fail(TreeBuildingError(
                ErrorKind.STRUCTURE,
                f"Unclosed tag <{current.tag_name}>: "
                f"{len(stack)} element(s) still open at end of input",
                current.position,
                {"tag_name": current.tag_name, "open_elements": len(stack)},
            ))

        self.logger.debug(
            "Tree building completed",
            extra={"token_count": token_count, "top_level_nodes": len(root.children)},
        )
        return root.children

    def _unmatched_closing_tag(
        self,
        token: ClosingTagToken,
        current: ElementNode,
        root: ElementNode
    ) -> TreeBuildingError:
        if current is root:
            expected = "no open element"
        else:
            expected = f"</{current.tag_name}>"
        return TreeBuildingError(
            ErrorKind.STRUCTURE,
            f"Unmatched closing tag </{token.tag_name}>: expected {expected}",
            token.position,
            {"tag_name": token.tag_name, "expected": current.tag_name or None},
        )

    def _fail(self, error: TreeBuildingError) -> TreeBuildingError:
        self.logger.debug(
            "Tree building failed",
            extra={"error_kind": error.kind.name, "details": error.details},
        )
        return error


@dataclass
class ParseResult:
    """Outcome of a parse with metrics and diagnostics.

    Produced by :meth:`MarkupParser.parse_with_metrics` (which re-raises on
    failure) and by :func:`validate` (which does not).
    """

    nodes: List[Node] = field(default_factory=list)
    success: bool = True
    error: Optional[MarkupError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Total number of elements in the tree."""
        return sum(1 for node in iter_nodes(self.nodes) if isinstance(node, ElementNode))

    @property
    def text_count(self) -> int:
        """Total number of text nodes in the tree."""
        return sum(1 for node in iter_nodes(self.nodes) if isinstance(node, TextNode))

    @property
    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "success": self.success,
            "nodes": nodes_to_dicts(self.nodes),
            "element_count": self.element_count,
            "performance": self.performance.to_dict(),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


def measure_depth(nodes: Iterable[Node]) -> int:
    """Depth of the deepest element (top-level elements have depth 1)."""
    max_depth = 0
    stack = [(node, 1) for node in nodes if isinstance(node, ElementNode)]
    while stack:
        element, depth = stack.pop()
        max_depth = max(max_depth, depth)
        stack.extend(
            (child, depth + 1) for child in element.children
            if isinstance(child, ElementNode)
        )
    return max_depth
