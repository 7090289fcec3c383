"""Token migration commands backed by the built-in migration registry."""

from __future__ import annotations

import asyncio
from typing import Optional

import click

from ...exceptions import TokenVersioningError
from ...versioning import MigrationRunner, default_registry
from ..utils import CLIError, emit, get_config_manager, load_token_file, render


def register(main: click.Group) -> None:
    """Attach migration commands to the root CLI."""

    @click.group()
    def migrate() -> None:
        """Token migration commands."""

    @migrate.command("run")
    @click.argument("token_file", type=click.Path(exists=True, dir_okay=False))
    @click.option("--from", "from_version", required=True, help="Version of TOKEN_FILE")
    @click.option("--to", "to_version", required=True, help="Target version")
    @click.option(
        "--strict/--permissive",
        default=None,
        help="Require a contiguous migration chain (defaults to configuration)",
    )
    @click.option(
        "--format",
        "output_format",
        type=click.Choice(["json", "yaml"]),
        default="json",
        show_default=True,
    )
    @click.option("--output", "-o", type=click.Path(), help="Write migrated tokens to a file")
    @click.pass_context
    def migrate_run(
        ctx: click.Context,
        token_file: str,
        from_version: str,
        to_version: str,
        strict: Optional[bool],
        output_format: str,
        output: Optional[str],
    ) -> None:
        """Migrate TOKEN_FILE between two versions."""
        config = get_config_manager(ctx)
        strict_chain = config.migrations.strict_chain if strict is None else strict
        runner = MigrationRunner(default_registry(), strict_chain=strict_chain)
        tokens = load_token_file(token_file)
        try:
            migrated = asyncio.run(runner.migrate(tokens, from_version, to_version))
        except TokenVersioningError as e:
            raise CLIError(str(e))
        emit(render(migrated, output_format), output)

    @migrate.command("path")
    @click.option("--from", "from_version", required=True)
    @click.option("--to", "to_version", required=True)
    def migrate_path(from_version: str, to_version: str) -> None:
        """Show the chain of migrations between two versions."""
        try:
            path = default_registry().get_migration_path(from_version, to_version)
        except TokenVersioningError as e:
            raise CLIError(str(e))
        for migration in path:
            click.echo(
                f"{migration.from_version} -> {migration.to_version}: {migration.description}"
            )

    @migrate.command("list")
    def migrate_list() -> None:
        """List the built-in migrations."""
        rows = [
            dict(migration.describe(), reversible=migration.reversible)
            for migration in default_registry()
        ]
        click.echo(render(rows, "json"))

    main.add_command(migrate)
