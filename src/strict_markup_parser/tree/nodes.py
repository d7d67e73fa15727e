"""Document tree node types.

Trees can be arbitrarily deep, so every traversal here walks an explicit stack
instead of recursing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from strict_markup_parser.shared import TokenPosition


class NodeType(Enum):
    """Node kinds, numbered like DOM ``nodeType`` values."""

    ELEMENT = 1
    TEXT = 3


@dataclass
class TextNode:
    """Literal text content."""

    text: str
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT

    def to_dict(self) -> Dict[str, Any]:
        return {"node_type": self.node_type.name, "text": self.text}


@dataclass(eq=False)
class ElementNode:
    """An element with its attributes and ordered children."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    position: Optional[TokenPosition] = field(default=None, compare=False)

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT

    def __eq__(self, other: object) -> bool:
        # Iterative comparison so deep trees do not hit the recursion limit.
        if not isinstance(other, ElementNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if (
                left.tag_name != right.tag_name
                or left.attributes != right.attributes
                or len(left.children) != len(right.children)
            ):
                return False
            for left_child, right_child in zip(left.children, right.children):
                if isinstance(left_child, ElementNode) and isinstance(right_child, ElementNode):
                    pending.append((left_child, right_child))
                elif left_child != right_child:
                    return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def iter(self) -> Iterator["Node"]:
        """Iterate over all descendants in document (pre-)order."""
        return iter_nodes(self.children)

    def find(self, tag_name: str) -> Optional["ElementNode"]:
        """Find first descendant element with matching tag name."""
        return next(
            (
                node for node in self.iter()
                if isinstance(node, ElementNode) and node.tag_name == tag_name
            ),
            None,
        )

    def find_all(self, tag_name: str) -> List["ElementNode"]:
        """Find all descendant elements with matching tag name."""
        return [
            node for node in self.iter()
            if isinstance(node, ElementNode) and node.tag_name == tag_name
        ]

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(node.text for node in self.iter() if isinstance(node, TextNode))

    def to_dict(self) -> Dict[str, Any]:
        """Convert element and its subtree to a dictionary."""
        return nodes_to_dicts([self])[0]


Node = Union[ElementNode, TextNode]


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Iterate over ``nodes`` and all their descendants in document order."""
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, ElementNode):
            stack.extend(reversed(node.children))


def nodes_to_dicts(nodes: Iterable[Node]) -> List[Dict[str, Any]]:
    """Convert a node list to nested dictionaries suitable for JSON."""
    result: List[Dict[str, Any]] = []
    stack = [(node, result) for node in reversed(list(nodes))]
    while stack:
        node, target = stack.pop()
        if isinstance(node, TextNode):
            target.append(node.to_dict())
            continue
        children: List[Dict[str, Any]] = []
        target.append({
            "node_type": node.node_type.name,
            "tag_name": node.tag_name,
            "attributes": dict(node.attributes),
            "children": children,
        })
        stack.extend((child, children) for child in reversed(node.children))
    return result
