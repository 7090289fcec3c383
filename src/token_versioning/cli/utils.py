"""Shared helpers for the CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union, cast

import click
import yaml

from ..config import ConfigManager


class CLIError(click.ClickException):
    """Base exception for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def get_config_manager(ctx: click.Context) -> ConfigManager:
    """Return the config manager stored on the click context."""
    return cast(ConfigManager, ctx.obj["config"])


def load_token_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a token tree from a JSON or YAML file."""
    path = Path(file_path)
    if not path.exists():
        raise CLIError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CLIError(f"Invalid token file {path}: {e}")

    if not isinstance(data, dict):
        raise CLIError(f"Token file {path} must contain a mapping at the root")
    return data


def render(data: Any, output_format: str) -> str:
    """Render data as JSON or YAML text."""
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    return json.dumps(data, indent=2, default=str)


def emit(text: str, output: Optional[str]) -> None:
    """Print ``text`` or write it to ``output``."""
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        click.echo(f"✓ Written to {output}")
    else:
        click.echo(text)
