"""Versioning and migration engine for design token trees.

Exports:
- SemanticVersion: parse, compare and increment semantic versions.
- diff_tokens / classify_changes: structural diff and bump selection.
- TokenVersionStore: immutable snapshots with tagging and bounded retention.
- MigrationRegistry / MigrationRunner: ordered forward and rollback pipelines.
"""

from .builtin_migrations import BUILTIN_MIGRATIONS, default_registry
from .classifier import (
    breaking_changes,
    classify_changes,
    has_breaking_changes,
    has_new_features,
)
from .differ import diff_tokens
from .history import build_history, export_history, write_history
from .migrations import MigrationRegistry, MigrationRunner, TokenMigration
from .models import (
    ChangeType,
    IncrementType,
    TokenChange,
    TokenVersion,
    VersionedSnapshot,
    VersionInfo,
)
from .semver import SemanticVersion, compare_versions, parse_version
from .store import TokenVersionStore

__all__ = [
    "BUILTIN_MIGRATIONS",
    "ChangeType",
    "IncrementType",
    "MigrationRegistry",
    "MigrationRunner",
    "SemanticVersion",
    "TokenChange",
    "TokenMigration",
    "TokenVersion",
    "TokenVersionStore",
    "VersionInfo",
    "VersionedSnapshot",
    "breaking_changes",
    "build_history",
    "classify_changes",
    "compare_versions",
    "default_registry",
    "diff_tokens",
    "export_history",
    "has_breaking_changes",
    "has_new_features",
    "parse_version",
    "write_history",
]
