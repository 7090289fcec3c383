"""
Versioned snapshot storage for token trees.

Single responsibility: Record immutable token snapshots under semantic
versions, track the current version, and retain a bounded history.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config.manager import VersioningConfig
from ..exceptions import BreakingChangeError, NotFoundError, ValidationError, VersionConflictError
from ..logging import get_logger
from ..utils.objects import TokenTree, deep_clone, is_mapping
from .classifier import breaking_changes, classify_changes
from .differ import diff_tokens
from .history import build_history, export_history
from .migrations import MigrationRegistry
from .models import IncrementType, TokenChange, TokenVersion, VersionedSnapshot, VersionInfo
from .semver import SemanticVersion, same_version, version_sort_key

logger = get_logger(__name__)


class TokenVersionStore:
    """
    In-memory store of versioned token snapshots.

    The store is not safe for interleaved writers: ``create_version`` reads the
    current head, diffs against it and appends. Serialize writers or pass
    ``expected_current`` to detect a moved head.
    """

    def __init__(
        self,
        config: Optional[VersioningConfig] = None,
        registry: Optional[MigrationRegistry] = None,
    ):
        """
        Initialize the store.

        Args:
            config: Retention and tagging options
            registry: Migrations included in exported history
        """
        self.config = config or VersioningConfig()
        self.registry = registry
        self._snapshots: Dict[str, VersionedSnapshot] = {}
        self._current_version: str = str(SemanticVersion.parse(self.config.initial_version))

    @property
    def current_version(self) -> str:
        return self._current_version

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, version: object) -> bool:
        return version in self._snapshots

    def create_version(
        self,
        tokens: Mapping[str, Any],
        info: Union[VersionInfo, Mapping[str, Any], None] = None,
        *,
        expected_current: Optional[str] = None,
    ) -> str:
        """
        Record ``tokens`` as a new version.

        The increment is chosen from the effective changes: caller-supplied
        ``info.changes`` when present, otherwise a diff against the current
        snapshot. ``info.breaking`` forces a major bump.

        Args:
            tokens: Fully resolved token tree
            info: Version metadata (VersionInfo or a dict of its fields)
            expected_current: Reject the write if the head is no longer this version

        Returns:
            str: The new version string

        Raises:
            ValidationError: Invalid tokens or metadata; nothing is recorded
            BreakingChangeError: Undeclared breaking changes with enforce_breaking on
            VersionConflictError: Head moved away from ``expected_current``
        """
        info = self._coerce_info(info)
        if not is_mapping(tokens):
            raise ValidationError(
                "Token tree must be a mapping",
                field_errors={"tokens": f"got {type(tokens).__name__}"},
            )
        if expected_current is not None and not same_version(
            expected_current, self._current_version
        ):
            raise VersionConflictError(
                f"Current version is {self._current_version}, expected {expected_current}",
                expected=expected_current,
                actual=self._current_version,
            )

        current = SemanticVersion.parse(self._current_version)
        if info.changes is not None:
            changes = tuple(deep_clone(list(info.changes)))
        else:
            changes = tuple(diff_tokens(self.get_current_tokens(), tokens))

        if self.config.enforce_breaking and info.breaking is not True:
            undeclared = breaking_changes(changes)
            if undeclared:
                raise BreakingChangeError(paths=[change.path for change in undeclared])

        increment = classify_changes(changes, breaking=bool(info.breaking))
        new_version = str(current.increment(increment))
        if new_version in self._snapshots:
            # Happens after switching back to an older version and bumping again
            raise VersionConflictError(
                f"Version {new_version} already exists",
                expected=self._current_version,
                actual=new_version,
            )

        tags = list(info.tags)
        if self.config.auto_tag:
            tags.append(increment.value)

        record = TokenVersion(
            version=new_version,
            created_at=datetime.now(timezone.utc).isoformat(),
            created_by=info.created_by,
            description=info.description,
            breaking=increment is IncrementType.MAJOR,
            tags=tags,
            parent=self._current_version,
            changes=changes,
        )
        self._snapshots[new_version] = VersionedSnapshot(record, deep_clone(dict(tokens)))
        self._current_version = new_version

        logger.info(
            "version_created",
            version=new_version,
            parent=record.parent,
            increment=increment.value,
            change_count=len(changes),
        )

        if self.config.max_versions and len(self._snapshots) > self.config.max_versions:
            self._prune_old_versions()

        return new_version

    def _coerce_info(self, info: Union[VersionInfo, Mapping[str, Any], None]) -> VersionInfo:
        if info is None:
            return VersionInfo()
        if isinstance(info, Mapping):
            try:
                info = VersionInfo(**info)
            except TypeError as e:
                raise ValidationError(f"Invalid version info: {e}") from e
        elif not isinstance(info, VersionInfo):
            raise ValidationError(
                "Version info must be a VersionInfo or a mapping",
                field_errors={"info": f"got {type(info).__name__}"},
            )

        if info.tags is None:
            info = replace(info, tags=())
        if not isinstance(info.tags, (list, tuple)) or not all(
            isinstance(tag, str) for tag in info.tags
        ):
            raise ValidationError(
                "Tags must be a sequence of strings", field_errors={"tags": repr(info.tags)}
            )
        if info.changes is not None:
            if not isinstance(info.changes, (list, tuple)) or not all(
                isinstance(change, TokenChange) for change in info.changes
            ):
                raise ValidationError(
                    "Changes must be TokenChange records",
                    field_errors={"changes": "expected TokenChange instances"},
                )
        return info

    def get_version(self, version: str) -> Optional[VersionedSnapshot]:
        """Return the snapshot stored under ``version`` or None."""
        snapshot = self._snapshots.get(version)
        if snapshot is None:
            return None
        return VersionedSnapshot(deep_clone(snapshot.version), deep_clone(snapshot.tokens))

    def get_current_tokens(self) -> Optional[TokenTree]:
        """Return a copy of the current token tree, or None before the first version."""
        snapshot = self._snapshots.get(self._current_version)
        return deep_clone(snapshot.tokens) if snapshot else None

    def list_versions(self) -> List[TokenVersion]:
        """Copies of all version records, newest first."""
        records = [deep_clone(snapshot.version) for snapshot in self._snapshots.values()]
        return sorted(
            records, key=lambda record: version_sort_key(record.version), reverse=True
        )

    def switch_to_version(self, version: str) -> TokenTree:
        """
        Make ``version`` current.

        Raises:
            NotFoundError: If the version is not stored
        """
        snapshot = self._require(version)
        previous = self._current_version
        self._current_version = version
        logger.info("version_switched", version=version, previous=previous)
        return deep_clone(snapshot.tokens)

    def tag_version(self, version: str, tags: Sequence[str]) -> None:
        """
        Append tags to a stored version.

        Raises:
            NotFoundError: If the version is not stored
        """
        if isinstance(tags, str):
            tags = [tags]
        snapshot = self._require(version)
        snapshot.version.tags.extend(tags)
        logger.info("version_tagged", version=version, tags=list(tags))

    def get_versions_by_tag(self, tag: str) -> List[TokenVersion]:
        return [
            deep_clone(snapshot.version)
            for snapshot in self._snapshots.values()
            if tag in snapshot.version.tags
        ]

    def build_history(self) -> Dict[str, Any]:
        """Structured history: current version, version records and migrations."""
        migrations = self.registry.migrations if self.registry else ()
        return build_history(self._current_version, self.list_versions(), migrations)

    def export_history(self, format: str = "json") -> str:
        """Serialize the history as JSON or YAML."""
        return export_history(self.build_history(), format=format)

    def _require(self, version: str) -> VersionedSnapshot:
        snapshot = self._snapshots.get(version)
        if snapshot is None:
            raise NotFoundError(
                f"Version {version} not found", resource="version", identifier=version
            )
        return snapshot

    def _prune_old_versions(self) -> None:
        keep = {record.version for record in self.list_versions()[: self.config.max_versions]}
        pruned = [version for version in self._snapshots if version not in keep]
        for version in pruned:
            del self._snapshots[version]
        logger.info("versions_pruned", pruned=pruned, retained=len(self._snapshots))
