"""
Semantic version parsing, ordering and increments.

Single responsibility: Model ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``
versions as immutable values.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..exceptions import ParseError, ValidationError
from .models import IncrementType

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

SEMVER_PATTERN = re.compile(
    r"v?([0-9]+)\.([0-9]+)\.([0-9]+)"
    rf"(?:-({_IDENTIFIERS}))?"
    rf"(?:\+({_IDENTIFIERS}))?"
)

VersionLike = Union["SemanticVersion", str]


def _compare_prerelease(left: str, right: str) -> int:
    """Compare prerelease strings with SemVer 2.0 identifier precedence."""
    left_ids = left.split(".")
    right_ids = right.split(".")
    for a, b in zip(left_ids, right_ids):
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            diff = int(a) - int(b)
            if diff:
                return diff
        elif a_num != b_num:
            # Numeric identifiers have lower precedence than alphanumeric ones
            return -1 if a_num else 1
        elif a != b:
            return -1 if a < b else 1
    return len(left_ids) - len(right_ids)


@dataclass(frozen=True)
class SemanticVersion:
    """Immutable semantic version. Operations return new instances."""

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ParseError(
                    f"Version component {name} must be a non-negative integer",
                    value=value,
                )

    @classmethod
    def parse(cls, version: VersionLike) -> "SemanticVersion":
        """
        Parse a version string, optionally prefixed with ``v``.

        Raises:
            ParseError: If the string is not a valid semantic version
        """
        if isinstance(version, SemanticVersion):
            return version
        if not isinstance(version, str):
            raise ParseError(f"Invalid semantic version: {version!r}", value=version)

        match = SEMVER_PATTERN.fullmatch(version)
        if not match:
            raise ParseError(f"Invalid semantic version: {version}", value=version)

        major, minor, patch, prerelease, build = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease, build)

    def to_string(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    def __str__(self) -> str:
        return self.to_string()

    def increment(self, kind: Union[IncrementType, str]) -> "SemanticVersion":
        """Return the next version for ``kind``; prerelease and build are cleared."""
        try:
            kind = IncrementType(kind)
        except ValueError:
            raise ValidationError(
                f"Unknown increment type: {kind}",
                field_errors={"kind": "expected one of major, minor, patch"},
            ) from None

        if kind is IncrementType.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if kind is IncrementType.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    def compare(self, other: VersionLike) -> int:
        """
        Compare precedence with another version.

        Build metadata never participates; a prerelease sorts below its
        final release.

        Returns:
            Negative, zero or positive like a classic ``cmp``
        """
        other = SemanticVersion.parse(other)

        for mine, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ):
            if mine != theirs:
                return mine - theirs

        if self.prerelease and not other.prerelease:
            return -1
        if not self.prerelease and other.prerelease:
            return 1
        if self.prerelease and other.prerelease:
            return _compare_prerelease(self.prerelease, other.prerelease)
        return 0

    def is_compatible(self, other: VersionLike) -> bool:
        """True when majors match and, for unstable 0.x versions, minors match too."""
        other = SemanticVersion.parse(other)
        if self.major != other.major:
            return False
        if self.major == 0 and self.minor != other.minor:
            return False
        return True

    def __lt__(self, other: Any) -> bool:
        return self._ordered(other, lambda c: c < 0)

    def __le__(self, other: Any) -> bool:
        return self._ordered(other, lambda c: c <= 0)

    def __gt__(self, other: Any) -> bool:
        return self._ordered(other, lambda c: c > 0)

    def __ge__(self, other: Any) -> bool:
        return self._ordered(other, lambda c: c >= 0)

    def _ordered(self, other: Any, check: Callable[[int], bool]) -> bool:
        if not isinstance(other, (SemanticVersion, str)):
            return NotImplemented
        return check(self.compare(other))


def parse_version(version: VersionLike) -> SemanticVersion:
    return SemanticVersion.parse(version)


def compare_versions(left: VersionLike, right: VersionLike) -> int:
    """Compare two versions given as strings or instances."""
    return SemanticVersion.parse(left).compare(right)


def same_version(left: VersionLike, right: VersionLike) -> bool:
    """True when two versions have equal precedence."""
    return compare_versions(left, right) == 0


version_sort_key = functools.cmp_to_key(compare_versions)
