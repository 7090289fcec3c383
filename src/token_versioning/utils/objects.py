"""Helpers for working with nested token mappings."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, MutableMapping, Union

Primitive = Union[str, int, float, bool, None, List[Any]]
TokenValue = Union[Primitive, Mapping[str, "TokenValue"]]
TokenTree = Dict[str, TokenValue]

_MISSING = object()


def is_mapping(value: Any) -> bool:
    """Return True for mapping nodes of a token tree."""
    return isinstance(value, Mapping)


def deep_clone(value: Any) -> Any:
    """Return a fully independent copy of a token tree or value."""
    return copy.deepcopy(value)


def split_path(path: str) -> List[str]:
    """Split a dotted path into its key segments; the empty path has none."""
    return path.split(".") if path else []


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def get_path(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """
    Read a value from a nested mapping by dotted path.

    Args:
        tree: Token tree to read from
        path: Dotted key path, e.g. ``colors.primary.500``
        default: Value returned when any segment is missing

    Returns:
        The value at ``path`` or ``default``
    """
    node: Any = tree
    for segment in split_path(path):
        if not is_mapping(node):
            return default
        node = node.get(segment, _MISSING)
        if node is _MISSING:
            return default
    return node


def set_path(tree: MutableMapping[str, Any], path: str, value: Any) -> None:
    """
    Write a value into a nested mapping by dotted path.

    Intermediate mappings are created when missing; non-mapping intermediates
    are replaced.
    """
    segments = split_path(path)
    if not segments:
        raise ValueError("Cannot set the root of a token tree")

    node: MutableMapping[str, Any] = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value


def describe_tree(tree: Any) -> Dict[str, int]:
    """Summarise a token tree as counts, for logging without raw values."""
    groups = 0
    leaves = 0
    stack = [tree]
    while stack:
        node = stack.pop()
        if is_mapping(node):
            groups += 1
            stack.extend(node.values())
        else:
            leaves += 1
    return {"groups": groups, "leaves": leaves}
