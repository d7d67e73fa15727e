"""Render node trees back into markup accepted by the tokenizer."""

from typing import Iterable, List, Tuple, Union

from strict_markup_parser.tokenization.tokenizer import (
    NAME_CHARACTERS,
    NAME_START_CHARACTERS,
)

from .nodes import ElementNode, Node, TextNode


def _check_name(name: str, what: str) -> None:
    if not name or name[0] not in NAME_START_CHARACTERS or any(
        char not in NAME_CHARACTERS for char in name[1:]
    ):
        raise ValueError(f"Cannot serialize {what} {name!r}")


def _start_tag(element: ElementNode, self_closing: bool) -> str:
    _check_name(element.tag_name, "tag name")
    parts = [element.tag_name]
    for name, value in element.attributes.items():
        _check_name(name, "attribute name")
        if '"' in value:
            raise ValueError(f"Attribute value for {name!r} cannot contain '\"'")
        parts.append(f'{name}="{value}"')
    if self_closing:
        return f"<{' '.join(parts)} />"
    return f"<{' '.join(parts)}>"


def to_markup(nodes: Union[Node, Iterable[Node]]) -> str:
    """Serialize nodes to markup.

    Childless elements are written as ``<name />``. The output parses back to
    an equal tree.

    Raises:
        ValueError: If a node holds text or names the grammar cannot express
    """
    if isinstance(nodes, (ElementNode, TextNode)):
        nodes = [nodes]

    out: List[str] = []
    # Items are either nodes to open or closing tags to emit.
    stack: List[Tuple[bool, Union[Node, str]]] = [
        (False, node) for node in reversed(list(nodes))
    ]
    while stack:
        is_close, item = stack.pop()
        if is_close:
            out.append(f"</{item}>")
        elif isinstance(item, TextNode):
            if "<" in item.text:
                raise ValueError("Text content cannot contain '<'")
            out.append(item.text)
        elif isinstance(item, ElementNode):
            if not item.children:
                out.append(_start_tag(item, self_closing=True))
                continue
            out.append(_start_tag(item, self_closing=False))
            stack.append((True, item.tag_name))
            stack.extend((False, child) for child in reversed(item.children))
        else:
            raise TypeError(f"Unsupported node type: {type(item).__name__}")
    return "".join(out)
