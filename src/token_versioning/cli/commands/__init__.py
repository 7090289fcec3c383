"""Command registration helpers for the CLI."""

from __future__ import annotations

import click

from . import migrate, semver, tokens


def register_all(main: click.Group) -> None:
    """Register all command groups on the root CLI."""
    semver.register(main)
    tokens.register(main)
    migrate.register(main)
