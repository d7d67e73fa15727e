"""Tree building for strict markup parsing.

Key Components:
    TreeBuilder: Stack automaton turning tokens into nodes
    ElementNode: Element with attributes and ordered children
    TextNode: Literal text content
    ParseResult: Nodes plus metrics and diagnostics
    to_markup: Serializer producing markup that parses back to the same tree
"""

from .builder import ParseResult, TreeBuilder, measure_depth
from .nodes import ElementNode, Node, NodeType, TextNode, iter_nodes, nodes_to_dicts
from .serialize import to_markup

__all__ = [
    "ElementNode",
    "Node",
    "NodeType",
    "ParseResult",
    "TextNode",
    "TreeBuilder",
    "iter_nodes",
    "measure_depth",
    "nodes_to_dicts",
    "to_markup",
]
