"""Token tree diff, classification and history commands."""

from __future__ import annotations

from typing import Optional, Tuple

import click

from ...exceptions import TokenVersioningError
from ...versioning import (
    TokenVersionStore,
    VersionInfo,
    classify_changes,
    default_registry,
    diff_tokens,
    has_breaking_changes,
    has_new_features,
)
from ..utils import CLIError, emit, get_config_manager, load_token_file, render


def register(main: click.Group) -> None:
    """Attach token commands to the root CLI."""

    @click.group()
    def tokens() -> None:
        """Token tree comparison and history."""

    @tokens.command("diff")
    @click.argument("old_file", type=click.Path(exists=True, dir_okay=False))
    @click.argument("new_file", type=click.Path(exists=True, dir_okay=False))
    @click.option(
        "--format",
        "output_format",
        type=click.Choice(["json", "yaml"]),
        default="json",
        show_default=True,
    )
    @click.option("--output", "-o", type=click.Path(), help="Write the diff to a file")
    def tokens_diff(
        old_file: str, new_file: str, output_format: str, output: Optional[str]
    ) -> None:
        """List changes between two token files."""
        changes = diff_tokens(load_token_file(old_file), load_token_file(new_file))
        emit(render([change.to_dict() for change in changes], output_format), output)

    @tokens.command("classify")
    @click.argument("old_file", type=click.Path(exists=True, dir_okay=False))
    @click.argument("new_file", type=click.Path(exists=True, dir_okay=False))
    def tokens_classify(old_file: str, new_file: str) -> None:
        """Report which version increment the changes require."""
        changes = diff_tokens(load_token_file(old_file), load_token_file(new_file))
        summary = {
            "increment": classify_changes(changes).value,
            "breaking": has_breaking_changes(changes),
            "features": has_new_features(changes),
            "changes": len(changes),
        }
        click.echo(render(summary, "json"))

    @tokens.command("history")
    @click.argument(
        "token_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
    )
    @click.option("--tag", "tags", multiple=True, help="Tag applied to every version")
    @click.option("--created-by", help="Author recorded on each version")
    @click.option(
        "--format",
        "output_format",
        type=click.Choice(["json", "yaml"]),
        default=None,
        help="Export format (defaults to the configured one)",
    )
    @click.option("--output", "-o", type=click.Path(), help="Write the history to a file")
    @click.pass_context
    def tokens_history(
        ctx: click.Context,
        token_files: Tuple[str, ...],
        tags: Tuple[str, ...],
        created_by: Optional[str],
        output_format: Optional[str],
        output: Optional[str],
    ) -> None:
        """Record TOKEN_FILES as successive versions and export the history."""
        config = get_config_manager(ctx)
        store = TokenVersionStore(config.versioning, registry=default_registry())
        try:
            for path in token_files:
                store.create_version(
                    load_token_file(path),
                    VersionInfo(created_by=created_by, description=path, tags=tags),
                )
            text = store.export_history(output_format or config.export.format)
        except TokenVersioningError as e:
            raise CLIError(str(e))
        emit(text, output or config.export.output_path)

    main.add_command(tokens)
