"""
tree-sitter helpers for C# source.

Shared by the C# frontend (reading declarations) and the writer
(validating generated units).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import tree_sitter_c_sharp as ts_csharp
from tree_sitter import Language, Parser


@lru_cache(maxsize=1)
def csharp_language() -> Language:
    return Language(ts_csharp.language())


def create_parser() -> Parser:
    return Parser(csharp_language())


def parse_csharp(code: str) -> Any:
    """Parse C# source code into a tree-sitter Tree."""
    return create_parser().parse(bytes(code, "utf8"))


def find_syntax_errors(node: Any) -> list[Any]:
    """Find all ERROR and MISSING nodes in the tree."""
    errors = []
    if node.type == "ERROR" or node.is_missing:
        errors.append(node)
    for child in node.children:
        errors.extend(find_syntax_errors(child))
    return errors


def node_text(node: Any, source: bytes) -> str:
    """Get the source text for a node."""
    return source[node.start_byte : node.end_byte].decode("utf8")


def find_children(node: Any, *node_types: str) -> list[Any]:
    """Direct children of the given types."""
    return [child for child in node.children if child.type in node_types]


def first_child(node: Any, *node_types: str) -> Any | None:
    for child in node.children:
        if child.type in node_types:
            return child
    return None


def field_or_child(node: Any, field_name: str, *node_types: str) -> Any | None:
    """Child for a grammar field, falling back to the first child of the given types."""
    child = node.child_by_field_name(field_name)
    if child is not None:
        return child
    return first_child(node, *node_types)
