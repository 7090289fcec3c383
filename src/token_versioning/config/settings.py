"""Environment-driven settings overlaid on top of the YAML configuration."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide overrides read from ``TOKENS_*`` environment variables.

    Unset fields stay None and leave the YAML value untouched.
    """

    config_path: Optional[str] = Field(default=None, description="Path to YAML configuration")
    max_versions: Optional[int] = Field(default=None, ge=1, description="Snapshot retention limit")
    auto_tag: Optional[bool] = Field(default=None, description="Tag versions with their increment kind")
    enforce_breaking: Optional[bool] = Field(
        default=None, description="Reject undeclared breaking changes"
    )
    initial_version: Optional[str] = Field(default=None, description="Base version of an empty store")
    strict_chain: Optional[bool] = Field(default=None, description="Require contiguous migration chains")
    export_format: Optional[str] = Field(default=None, description="History export format (json, yaml)")
    log_level: Optional[str] = Field(default=None, description="Log level")

    model_config = SettingsConfigDict(
        env_prefix="TOKENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
