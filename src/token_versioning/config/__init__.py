"""Configuration management for the token versioning engine."""

from .manager import (
    ConfigManager,
    ExportConfig,
    LoggingConfig,
    MigrationConfig,
    VersioningConfig,
)
from .settings import Settings

__all__ = [
    "ConfigManager",
    "ExportConfig",
    "LoggingConfig",
    "MigrationConfig",
    "Settings",
    "VersioningConfig",
]
