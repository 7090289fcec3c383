"""Shared helpers for token trees."""

from .objects import (
    TokenTree,
    TokenValue,
    deep_clone,
    describe_tree,
    get_path,
    is_mapping,
    join_path,
    set_path,
)

__all__ = [
    "TokenTree",
    "TokenValue",
    "deep_clone",
    "describe_tree",
    "get_path",
    "is_mapping",
    "join_path",
    "set_path",
]
