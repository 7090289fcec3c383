"""
Design token versioning: semantic versions, structural diffs, immutable
snapshots and ordered migration pipelines for nested design token trees.
"""

__version__ = "0.1.0"

from .config import ConfigManager
from .exceptions import (
    BreakingChangeError,
    CircularPathError,
    MigrationError,
    NoPathError,
    NotFoundError,
    ParseError,
    TokenVersioningError,
    ValidationError,
    VersionConflictError,
)
from .logging import get_logger, setup_logging
from .versioning import (
    MigrationRegistry,
    MigrationRunner,
    SemanticVersion,
    TokenChange,
    TokenMigration,
    TokenVersionStore,
    VersionInfo,
    default_registry,
    diff_tokens,
)

__all__ = [
    "BreakingChangeError",
    "CircularPathError",
    "ConfigManager",
    "MigrationError",
    "MigrationRegistry",
    "MigrationRunner",
    "NoPathError",
    "NotFoundError",
    "ParseError",
    "SemanticVersion",
    "TokenChange",
    "TokenMigration",
    "TokenVersionStore",
    "TokenVersioningError",
    "ValidationError",
    "VersionConflictError",
    "VersionInfo",
    "default_registry",
    "diff_tokens",
    "get_logger",
    "setup_logging",
]
