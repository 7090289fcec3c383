"""Semantic version commands."""

from __future__ import annotations

import click

from ...exceptions import TokenVersioningError
from ...versioning import SemanticVersion
from ..utils import CLIError


def register(main: click.Group) -> None:
    """Attach semver commands to the root CLI."""

    @click.group()
    def semver() -> None:
        """Semantic version utilities."""

    @semver.command("compare")
    @click.argument("left")
    @click.argument("right")
    def semver_compare(left: str, right: str) -> None:
        """Print -1, 0 or 1 comparing LEFT with RIGHT."""
        try:
            result = SemanticVersion.parse(left).compare(right)
        except TokenVersioningError as e:
            raise CLIError(str(e))
        click.echo(str((result > 0) - (result < 0)))

    @semver.command("bump")
    @click.argument("version")
    @click.option(
        "--kind",
        type=click.Choice(["major", "minor", "patch"]),
        default="patch",
        show_default=True,
        help="Increment to apply",
    )
    def semver_bump(version: str, kind: str) -> None:
        """Print VERSION incremented by KIND."""
        try:
            click.echo(str(SemanticVersion.parse(version).increment(kind)))
        except TokenVersioningError as e:
            raise CLIError(str(e))

    @semver.command("check-compat")
    @click.argument("left")
    @click.argument("right")
    def semver_check_compat(left: str, right: str) -> None:
        """Exit non-zero unless LEFT and RIGHT are compatible."""
        try:
            compatible = SemanticVersion.parse(left).is_compatible(right)
        except TokenVersioningError as e:
            raise CLIError(str(e))
        if not compatible:
            raise CLIError(f"{left} is not compatible with {right}", exit_code=2)
        click.echo(f"✓ {left} is compatible with {right}")

    main.add_command(semver)
