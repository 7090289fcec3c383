"""
Data models for token versioning.

Single responsibility: Define the records exchanged between the differ,
the classifier, the version store and the history exporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..utils.objects import TokenTree


class ChangeType(Enum):
    """Kinds of atomic change at a token path."""

    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"
    RENAME = "rename"


class IncrementType(Enum):
    """Semantic version increment kinds."""

    MAJOR = "major"  # Breaking changes
    MINOR = "minor"  # New tokens
    PATCH = "patch"  # Value tweaks


@dataclass(frozen=True)
class TokenChange:
    """One atomic difference at a dotted path in a token tree."""

    type: ChangeType
    path: str
    old_value: Any = None
    new_value: Any = None
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, ChangeType):
            object.__setattr__(self, "type", ChangeType(self.type))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "path": self.path}
        if self.type is not ChangeType.ADD:
            data["oldValue"] = self.old_value
        if self.type is not ChangeType.REMOVE:
            data["newValue"] = self.new_value
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass
class TokenVersion:
    """
    Version metadata for a stored snapshot.

    Only ``tags`` may change after creation, and only by appending.
    """

    version: str
    created_at: str
    created_by: Optional[str] = None
    description: Optional[str] = None
    breaking: bool = False
    tags: List[str] = field(default_factory=list)
    parent: Optional[str] = None
    changes: Tuple[TokenChange, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "createdAt": self.created_at,
            "createdBy": self.created_by,
            "description": self.description,
            "breaking": self.breaking,
            "tags": list(self.tags),
            "parent": self.parent,
            "changes": [change.to_dict() for change in self.changes],
        }


@dataclass(frozen=True)
class VersionedSnapshot:
    """A version record paired with the token tree stored at that version."""

    version: TokenVersion
    tokens: TokenTree


@dataclass
class VersionInfo:
    """Caller-supplied metadata for a new version."""

    created_by: Optional[str] = None
    description: Optional[str] = None
    breaking: Optional[bool] = None
    tags: Sequence[str] = ()
    changes: Optional[Sequence[TokenChange]] = None
