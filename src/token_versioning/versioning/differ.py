"""
Structural diffing of token trees.

Single responsibility: Turn two nested token mappings into an ordered list of
add/remove/modify change records.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..utils.objects import deep_clone, is_mapping, join_path
from .models import ChangeType, TokenChange

INITIAL_VERSION_REASON = "Initial version"


def value_kind(value: Any) -> str:
    """Classify a token value; differing kinds mean a type change."""
    if is_mapping(value):
        return "object"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def diff_tokens(
    old_tree: Optional[Mapping[str, Any]], new_tree: Mapping[str, Any]
) -> List[TokenChange]:
    """
    Compute the changes that turn ``old_tree`` into ``new_tree``.

    Args:
        old_tree: Previous token tree, or None when there is no previous version
        new_tree: Updated token tree

    Returns:
        Change records in walk order; empty when the trees are equal
    """
    if old_tree is None:
        return [
            TokenChange(
                type=ChangeType.ADD,
                path="",
                new_value=deep_clone(new_tree),
                reason=INITIAL_VERSION_REASON,
            )
        ]

    changes: List[TokenChange] = []
    _diff_mappings(old_tree, new_tree, "", changes)
    return changes


def _diff_mappings(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    changes: List[TokenChange],
) -> None:
    keys = list(old.keys()) + [key for key in new.keys() if key not in old]

    for key in keys:
        current_path = join_path(path, str(key))

        if key not in old:
            changes.append(
                TokenChange(
                    ChangeType.ADD, current_path, new_value=deep_clone(new[key])
                )
            )
            continue
        if key not in new:
            changes.append(
                TokenChange(
                    ChangeType.REMOVE, current_path, old_value=deep_clone(old[key])
                )
            )
            continue

        old_value, new_value = old[key], new[key]
        if value_kind(old_value) != value_kind(new_value):
            changes.append(_modified(current_path, old_value, new_value))
        elif is_mapping(old_value):
            _diff_mappings(old_value, new_value, current_path, changes)
        elif old_value != new_value:
            changes.append(_modified(current_path, old_value, new_value))


def _modified(path: str, old_value: Any, new_value: Any) -> TokenChange:
    return TokenChange(
        ChangeType.MODIFY,
        path,
        old_value=deep_clone(old_value),
        new_value=deep_clone(new_value),
    )
