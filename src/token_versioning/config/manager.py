"""
Configuration Manager for the token versioning engine.

Handles YAML-configurable settings for version retention, tagging,
migration chaining, history export and logging.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .settings import Settings


class VersioningConfig(BaseModel):
    """Version store configuration."""

    max_versions: Optional[int] = Field(
        default=None, ge=1, description="Keep only the N newest snapshots"
    )
    auto_tag: bool = Field(
        default=False, description="Tag each version with its increment kind"
    )
    enforce_breaking: bool = Field(
        default=False,
        description="Reject breaking changes unless the caller declares them",
    )
    initial_version: str = Field(
        default="1.0.0", description="Current version of an empty store"
    )

    @field_validator("initial_version")
    @classmethod
    def validate_initial_version(cls, v: str) -> str:
        """Validate that the initial version is a semantic version."""
        from ..exceptions import ParseError
        from ..versioning.semver import SemanticVersion

        try:
            return str(SemanticVersion.parse(v))
        except ParseError as e:
            raise ValueError(e.message) from e


class MigrationConfig(BaseModel):
    """Migration runner configuration."""

    strict_chain: bool = Field(
        default=False,
        description="Only follow contiguous from->to chains instead of any migration in range",
    )


class ExportConfig(BaseModel):
    """History export configuration."""

    format: str = Field(
        default="json", pattern="^(json|yaml)$", description="Export format"
    )
    output_path: Optional[str] = Field(
        default=None, description="Default file to write exported history to"
    )


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level",
    )
    format: str = Field(
        default="json", pattern="^(json|console)$", description="Log format"
    )
    file: Optional[str] = Field(default=None, description="Optional log file path")
    redact_token_values: bool = Field(
        default=True, description="Summarise raw token trees in log events"
    )


DEFAULT_CONFIG: Dict[str, Any] = {
    "versioning": {
        "max_versions": None,
        "auto_tag": False,
        "enforce_breaking": False,
        "initial_version": "1.0.0",
    },
    "migrations": {"strict_chain": False},
    "export": {"format": "json", "output_path": None},
    "logging": {
        "level": "WARNING",
        "format": "json",
        "file": None,
        "redact_token_values": True,
    },
}


class ConfigManager:
    """
    Manages YAML-configurable settings for the token versioning engine.

    Values are resolved in order: built-in defaults, the YAML file, then
    ``TOKENS_*`` environment variables.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        create_if_missing: bool = False,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize ConfigManager.

        Args:
            config_path: Path to YAML configuration file. If None, uses default locations.
            create_if_missing: Write the default configuration when the file is absent
            settings: Environment overrides; read from the process environment when None
        """
        self.settings = settings or Settings()
        self.config_path = self._resolve_config_path(config_path)
        self.create_if_missing = create_if_missing
        self._config_data: Dict[str, Any] = {}
        self._load_config()

    def _resolve_config_path(self, config_path: Optional[Union[str, Path]]) -> Path:
        """Resolve configuration file path."""
        if config_path:
            return Path(config_path)

        if self.settings.config_path:
            return Path(self.settings.config_path)

        default_paths = [
            Path("tokens.yaml"),
            Path("config/tokens.yaml"),
        ]
        for path in default_paths:
            if path.exists():
                return path

        return Path("tokens.yaml")

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._config_data = _deep_merge({}, DEFAULT_CONFIG)
            if self.create_if_missing:
                self._write_default_config()
        else:
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML configuration: {e}")
            if not isinstance(loaded, dict):
                raise ValueError(
                    f"Configuration root in {self.config_path} must be a mapping"
                )
            self._config_data = _deep_merge(DEFAULT_CONFIG, loaded)

        self._apply_env_overrides()
        self._initialize_config_sections()

    def _write_default_config(self) -> None:
        """Create default configuration file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(DEFAULT_CONFIG, f, default_flow_style=False, indent=2)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            "max_versions": ("versioning", "max_versions"),
            "auto_tag": ("versioning", "auto_tag"),
            "enforce_breaking": ("versioning", "enforce_breaking"),
            "initial_version": ("versioning", "initial_version"),
            "strict_chain": ("migrations", "strict_chain"),
            "export_format": ("export", "format"),
            "log_level": ("logging", "level"),
        }

        for setting, (section, key) in env_mappings.items():
            value = getattr(self.settings, setting)
            if value is not None:
                self._config_data.setdefault(section, {})[key] = value

    def _initialize_config_sections(self) -> None:
        """Initialize configuration sections from loaded data."""
        self.versioning = VersioningConfig(**self._config_data.get("versioning") or {})
        self.migrations = MigrationConfig(**self._config_data.get("migrations") or {})
        self.export = ExportConfig(**self._config_data.get("export") or {})
        self.logging = LoggingConfig(**self._config_data.get("logging") or {})

    def to_dict(self) -> Dict[str, Any]:
        """Return the effective configuration."""
        return {
            "versioning": self.versioning.model_dump(),
            "migrations": self.migrations.model_dump(),
            "export": self.export.model_dump(),
            "logging": self.logging.model_dump(),
        }


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for key, value in base.items():
        merged[key] = dict(value) if isinstance(value, dict) else value
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
