"""Tree-sitter parsing helpers shared by the language checkers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import tree_sitter_python
import tree_sitter_rust
from tree_sitter import Language, Node, Parser

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

_LANGUAGE_LOADERS: dict[str, Callable[[], object]] = {
    "python": tree_sitter_python.language,
    "rust": tree_sitter_rust.language,
}

_PARSERS: dict[str, Parser] = {}


def get_parser(language: str) -> Parser:
    """Return the cached Tree-sitter parser for a language."""
    parser = _PARSERS.get(language)
    if parser is None:
        parser = Parser(Language(_LANGUAGE_LOADERS[language]()))
        _PARSERS[language] = parser
    return parser


def parse_source(language: str, source: str, *, filename: str = "<source>") -> Node | None:
    """Parse source text and return the root node.

    Returns None when the source does not parse cleanly. A syntax tree with
    error nodes offers no reliable structure, so callers treat it as
    carrying no structural evidence.
    """
    try:
        data = source.encode("utf-8")
    except UnicodeEncodeError as exc:
        logger.debug("%s: %s source is not encodable: %s", filename, language, exc)
        return None

    tree = get_parser(language).parse(data)
    root = tree.root_node
    if root.has_error:
        logger.debug("%s: %s source did not parse cleanly", filename, language)
        return None
    return root


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def field_text(node: Node, field_name: str) -> str:
    return node_text(node.child_by_field_name(field_name))


def iter_descendants(node: Node | None, *types: str) -> Iterator[Node]:
    """Yield named descendants of node (pre-order), optionally filtered by type."""
    if node is None:
        return
    stack = list(reversed(node.named_children))
    while stack:
        current = stack.pop()
        if not types or current.type in types:
            yield current
        stack.extend(reversed(current.named_children))


def iter_children(node: Node | None, *types: str) -> Iterator[Node]:
    """Yield direct named children of node, optionally filtered by type."""
    if node is None:
        return
    for child in node.named_children:
        if not types or child.type in types:
            yield child


__all__ = [
    "field_text",
    "get_parser",
    "iter_children",
    "iter_descendants",
    "node_text",
    "parse_source",
]
