"""
Change classification for automatic version increments.

Precedence is breaking > additive > patch.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..utils.objects import is_mapping
from .differ import value_kind
from .models import ChangeType, IncrementType, TokenChange


def is_breaking_modification(change: TokenChange) -> bool:
    """A modification breaks consumers when the value kind changes or nested keys vanish."""
    if value_kind(change.old_value) != value_kind(change.new_value):
        return True
    if is_mapping(change.old_value):
        return any(key not in change.new_value for key in change.old_value)
    return False


def breaking_changes(changes: Optional[Iterable[TokenChange]]) -> List[TokenChange]:
    """Return the subset of ``changes`` that would invalidate existing consumers."""
    return [
        change
        for change in changes or ()
        if change.type is ChangeType.REMOVE
        or (change.type is ChangeType.MODIFY and is_breaking_modification(change))
    ]


def has_breaking_changes(changes: Optional[Iterable[TokenChange]]) -> bool:
    return bool(breaking_changes(changes))


def has_new_features(changes: Optional[Iterable[TokenChange]]) -> bool:
    return any(change.type is ChangeType.ADD for change in changes or ())


def classify_changes(
    changes: Optional[Iterable[TokenChange]], breaking: bool = False
) -> IncrementType:
    """
    Pick the version increment for a change list.

    Args:
        changes: Change records, usually from ``diff_tokens``
        breaking: Caller declared the release breaking; forces a major bump

    Returns:
        IncrementType to apply to the current version
    """
    changes = list(changes or ())
    if breaking or has_breaking_changes(changes):
        return IncrementType.MAJOR
    if has_new_features(changes):
        return IncrementType.MINOR
    return IncrementType.PATCH
