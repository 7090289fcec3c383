"""History export for version stores."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Union

import yaml

from ..exceptions import ValidationError
from .models import TokenVersion

if TYPE_CHECKING:
    from .migrations import TokenMigration

EXPORT_FORMATS = ("json", "yaml")


def build_history(
    current_version: Optional[str],
    versions: Iterable[TokenVersion],
    migrations: Iterable["TokenMigration"] = (),
) -> Dict[str, Any]:
    """Assemble the exported history structure."""
    return {
        "currentVersion": current_version,
        "versions": [version.to_dict() for version in versions],
        "migrations": [migration.describe() for migration in migrations],
    }


def export_history(history: Dict[str, Any], format: str = "json") -> str:
    """
    Serialize a history structure.

    Args:
        history: Output of ``build_history``
        format: ``json`` or ``yaml``

    Returns:
        str: Serialized history
    """
    if format == "json":
        return json.dumps(history, indent=2, default=str)
    if format == "yaml":
        return yaml.safe_dump(history, sort_keys=False, default_flow_style=False)
    raise ValidationError(
        f"Unsupported export format: {format}",
        field_errors={"format": f"expected one of {', '.join(EXPORT_FORMATS)}"},
    )


def write_history(text: str, path: Union[str, Path]) -> Path:
    """Write exported history to ``path``, creating parent directories."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    return output
